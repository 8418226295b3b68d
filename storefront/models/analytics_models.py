"""
Analytics Models
Click events and dashboard summaries
"""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from storefront.models.quota_models import StorageTier

class ClickEvent(BaseModel):
    """One WhatsApp order click"""
    product_id: str
    occurred_at: datetime

class TopClicked(BaseModel):
    """Click count for one product"""
    product_id: str
    count: int

class TopClickedProduct(BaseModel):
    """Top clicked entry joined with the product name"""
    product_id: str
    name: str
    clicks: int

class DiskUsage(BaseModel):
    """Disk section of the dashboard; empty when the CDN reported no data"""
    used_bytes: Optional[int] = None
    capacity_bytes: int
    percent: Optional[float] = None
    tier: Optional[StorageTier] = None
    used_formatted: Optional[str] = None
    capacity_formatted: str
    error: Optional[str] = None

class DashboardStats(BaseModel):
    """Analytics dashboard"""
    total_posts: int
    total_products: int
    total_order_clicks: int
    window_days: int
    top_clicked: List[TopClickedProduct]
    disk: DiskUsage
