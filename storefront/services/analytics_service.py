"""
Analytics Service
WhatsApp order clicks and the dashboard's top clicked products
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from datetime import datetime, timedelta
from typing import Callable, List, Optional
import logging

from storefront.models.analytics_models import ClickEvent, TopClickedProduct
from storefront.services.aggregation import top_clicked
from storefront.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

class AnalyticsService:
    """Order click recording and aggregation"""

    def __init__(self, db: AsyncIOMotorDatabase, clock: Callable[[], datetime] = datetime.utcnow):
        self.db = db
        self.order_clicks = db.order_clicks
        self.clock = clock

    async def record_click(self, product_id: str, offer_id: Optional[str] = None) -> str:
        """Store one order click"""

        click_id = str(ObjectId())
        await self.order_clicks.insert_one({
            "_id": click_id,
            "product_id": product_id,
            "offer_id": offer_id,
            "created_at": self.clock()
        })

        return click_id

    async def count_clicks(self) -> int:
        return await self.order_clicks.count_documents({})

    async def recent_click_events(self, since: datetime, scan_limit: int = 5000) -> List[ClickEvent]:
        """Click rows since a point in time, at most scan_limit of them"""

        rows = await self.order_clicks.find(
            {"created_at": {"$gte": since}},
            {"product_id": 1, "created_at": 1}
        ).limit(scan_limit).to_list(None)

        return [
            ClickEvent(product_id=row["product_id"], occurred_at=row["created_at"])
            for row in rows
            if isinstance(row.get("product_id"), str)
        ]

    async def top_clicked_products(
        self,
        window_days: int = 7,
        limit: int = 8,
        scan_limit: int = 5000
    ) -> List[TopClickedProduct]:
        """Most clicked products of the last window_days, with names"""

        window_start = self.clock() - timedelta(days=window_days)
        events = await self.recent_click_events(window_start, scan_limit)
        ranked = top_clicked(events, window_start, limit)

        if not ranked:
            return []

        names = await CatalogService(self.db).names_for([r.product_id for r in ranked])

        return [
            TopClickedProduct(
                product_id=r.product_id,
                name=names.get(r.product_id) or "Unknown",
                clicks=r.count
            )
            for r in ranked
        ]
