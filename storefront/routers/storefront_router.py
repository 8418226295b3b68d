"""
Storefront Router
Public catalog and WhatsApp order click-through
"""

from fastapi import APIRouter, HTTPException, Depends, status, Query
from pymongo.errors import PyMongoError
import logging
import math

from storefront.config import Settings, get_settings
from storefront.database import get_database
from storefront.models.catalog_models import (
    ALL_CATEGORIES, CATEGORY_LABELS, ProductCategory,
    OrderLinkResponse, OrderRequest, ProductListResponse
)
from storefront.services.aggregation import filter_products
from storefront.services.analytics_service import AnalyticsService
from storefront.services.catalog_service import CatalogService
from storefront.services.settings_service import AppSettingsService
from storefront.utils.formatting import format_rupiah
from storefront.utils.whatsapp import DEFAULT_ORDER_TEMPLATE, render_template, wa_link

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storefront", tags=["Storefront"])


@router.get("/products", response_model=ProductListResponse)
async def browse_products(
    q: str = Query("", description="Free-text search over name, type and description"),
    category: str = Query(ALL_CATEGORIES, description="Category value or ALL"),
    page: int = Query(1, ge=1),
    db=Depends(get_database),
    settings: Settings = Depends(get_settings)
):
    """Search and page through the catalog"""

    products = await CatalogService(db).list_products(with_offers=True)
    matched = filter_products(products, q, category)

    per_page = settings.PRODUCTS_PER_PAGE
    total = len(matched)
    total_pages = max(1, math.ceil(total / per_page))
    start = (page - 1) * per_page

    return ProductListResponse(
        products=matched[start:start + per_page],
        total=total,
        page=page,
        total_pages=total_pages
    )


@router.get("/categories")
async def list_categories(db=Depends(get_database)):
    """Categories set on at least one product, sorted by label"""

    products = await CatalogService(db).list_products()
    present = {p.category for p in products if p.category}
    categories = sorted(
        (c for c in ProductCategory if c.value in present),
        key=lambda c: CATEGORY_LABELS[c]
    )

    return {
        "categories": [{"value": c.value, "label": CATEGORY_LABELS[c]} for c in categories]
    }


@router.post("/products/{product_id}/order", response_model=OrderLinkResponse)
async def order_product(
    product_id: str,
    request: OrderRequest,
    db=Depends(get_database)
):
    """
    Record an order click and build the WhatsApp link

    The message comes from the wa_order_template setting.
    """

    catalog = CatalogService(db)
    product = await catalog.get_product(product_id)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product {product_id} not found"
        )

    offer = None
    if request.offer_id:
        offer = next((o for o in product.offers if o.id == request.offer_id), None)
        if not offer:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Offer {request.offer_id} not found"
            )

    try:
        template = await AppSettingsService(db).get_order_template()
    except PyMongoError as e:
        logger.warning(f"⚠️  Order template unavailable, using default: {e}")
        template = DEFAULT_ORDER_TEMPLATE

    message = render_template(template, {
        "name": product.name,
        "type": product.type,
        "category": product.category,
        "offer": offer.label if offer else None,
        "qty": offer.qty if offer else None,
        "unit": offer.unit if offer else None,
        "price": format_rupiah(offer.price) if offer else None
    })

    click_id = await AnalyticsService(db).record_click(product_id, request.offer_id)
    logger.info(f"🛒 Order click {click_id} for product {product_id}")

    return OrderLinkResponse(
        click_id=click_id,
        wa_link=wa_link(product.wa_number, message),
        message=message
    )
