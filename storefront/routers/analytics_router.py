"""
Analytics Router
Dashboard totals, top clicked products and disk usage
"""

from fastapi import APIRouter, Depends
from typing import Callable
import logging

from storefront.config import Settings, get_settings
from storefront.database import get_database
from storefront.dependencies import get_usage_client_factory
from storefront.exceptions import StorefrontError
from storefront.middleware.auth_middleware import verify_api_key
from storefront.models.analytics_models import DashboardStats, DiskUsage
from storefront.services.analytics_service import AnalyticsService
from storefront.services.catalog_service import CatalogService
from storefront.services.cloudinary_client import CloudinaryUsageClient
from storefront.services.post_service import PostService
from storefront.services.quota_manager import classify
from storefront.utils.formatting import format_bytes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["Analytics"])


async def _disk_usage(
    usage_client_factory: Callable[[], CloudinaryUsageClient],
    settings: Settings
) -> DiskUsage:
    """Disk section; upstream or configuration failures end up in the error field"""

    capacity = settings.STORAGE_CAPACITY_BYTES
    disk = DiskUsage(capacity_bytes=capacity, capacity_formatted=format_bytes(capacity))

    try:
        used_bytes = await usage_client_factory().fetch_used_bytes()
    except StorefrontError as e:
        logger.warning(f"⚠️  Disk usage unavailable: {e.message}")
        disk.error = e.message
        return disk

    if used_bytes is None:
        return disk

    sample = classify(
        used_bytes,
        capacity,
        settings.STORAGE_WARNING_PERCENT,
        settings.STORAGE_CRITICAL_PERCENT
    )
    disk.used_bytes = used_bytes
    disk.percent = sample.percent
    disk.tier = sample.tier
    disk.used_formatted = format_bytes(used_bytes)

    return disk


@router.get("/dashboard", response_model=DashboardStats)
async def get_analytics_dashboard(
    db=Depends(get_database),
    settings: Settings = Depends(get_settings),
    usage_client_factory: Callable[[], CloudinaryUsageClient] = Depends(get_usage_client_factory),
    current_admin: dict = Depends(verify_api_key)
):
    """
    Get the analytics dashboard

    Includes:
    - Totals of posts, products and order clicks
    - Most clicked products of the recent window
    - CDN disk usage
    """

    analytics = AnalyticsService(db)

    top = await analytics.top_clicked_products(
        window_days=settings.TOP_CLICKED_WINDOW_DAYS,
        limit=settings.TOP_CLICKED_LIMIT,
        scan_limit=settings.CLICK_SCAN_LIMIT
    )

    return DashboardStats(
        total_posts=await PostService(db).count_posts(),
        total_products=await CatalogService(db).count_products(),
        total_order_clicks=await analytics.count_clicks(),
        window_days=settings.TOP_CLICKED_WINDOW_DAYS,
        top_clicked=top,
        disk=await _disk_usage(usage_client_factory, settings)
    )
