"""
App Settings Service
Key/value settings editable from the dashboard
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional

from storefront.utils.whatsapp import DEFAULT_ORDER_TEMPLATE

WA_ORDER_TEMPLATE_KEY = "wa_order_template"

class AppSettingsService:
    """Reads and writes the app_settings collection"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.app_settings = db.app_settings

    async def get_value(self, key: str) -> Optional[str]:
        doc = await self.app_settings.find_one({"key": key})
        if not doc or doc.get("value") is None:
            return None
        return str(doc["value"])

    async def set_value(self, key: str, value: str) -> None:
        await self.app_settings.update_one(
            {"key": key},
            {"$set": {"key": key, "value": value}},
            upsert=True
        )

    async def get_order_template(self) -> str:
        """WhatsApp order template, or the built-in default"""
        return await self.get_value(WA_ORDER_TEMPLATE_KEY) or DEFAULT_ORDER_TEMPLATE
