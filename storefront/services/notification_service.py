"""
Notification Service
Admin dashboard notifications: listing, read state and cleanup
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from datetime import datetime
from typing import List, Optional, Dict, Any, Tuple
import logging

from storefront.models.notification_models import (
    NotificationType, NotificationCreate, Notification
)

logger = logging.getLogger(__name__)

class NotificationService:
    """
    Notification Service

    Features:
    - Manual notifications from the dashboard
    - Read / unread state
    - Bulk read and delete
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.notifications = db.notifications

    # ========================================================================
    # NOTIFICATION CREATION
    # ========================================================================

    async def create_notification(self, request: NotificationCreate) -> Notification:
        """Create a notification"""

        notif_id = str(ObjectId())

        notif_doc = {
            "_id": notif_id,
            "type": request.type.value,
            "title": request.title,
            "body": request.body,
            "is_read": False,
            "link_path": request.link_path,
            "entity_type": request.entity_type,
            "entity_id": request.entity_id,
            "meta": request.meta or {},
            "created_at": datetime.utcnow()
        }

        await self.notifications.insert_one(notif_doc)
        logger.info(f"Notification created: {request.title}")

        return self._doc_to_notification(notif_doc)

    # ========================================================================
    # NOTIFICATION RETRIEVAL
    # ========================================================================

    async def get_notification(self, notif_id: str) -> Optional[Notification]:
        """Get notification by ID"""

        notif = await self.notifications.find_one({"_id": notif_id})

        if not notif:
            return None

        return self._doc_to_notification(notif)

    async def list_notifications(
        self,
        unread_only: bool = False,
        notif_type: Optional[NotificationType] = None
    ) -> Tuple[List[Notification], int, int]:
        """List notifications, newest first"""

        query = {}

        if unread_only:
            query["is_read"] = False

        if notif_type:
            query["type"] = notif_type.value

        total = await self.notifications.count_documents(query)
        unread_count = await self.notifications.count_documents({"is_read": False})

        notifs = await self.notifications.find(query)\
            .sort("created_at", -1)\
            .to_list(None)

        return (
            [self._doc_to_notification(n) for n in notifs],
            total,
            unread_count
        )

    # ========================================================================
    # READ STATE
    # ========================================================================

    async def mark_as_read(self, notif_id: str) -> bool:
        """Mark notification as read"""

        result = await self.notifications.update_one(
            {"_id": notif_id},
            {"$set": {"is_read": True}}
        )

        return result.matched_count > 0

    async def mark_as_unread(self, notif_id: str) -> bool:
        """Mark notification as unread"""

        result = await self.notifications.update_one(
            {"_id": notif_id},
            {"$set": {"is_read": False}}
        )

        return result.matched_count > 0

    async def mark_all_as_read(self) -> int:
        """Mark all notifications as read"""

        result = await self.notifications.update_many(
            {"is_read": False},
            {"$set": {"is_read": True}}
        )

        return result.modified_count

    # ========================================================================
    # DELETION
    # ========================================================================

    async def delete_notification(self, notif_id: str) -> bool:
        """Delete notification"""

        result = await self.notifications.delete_one({"_id": notif_id})

        return result.deleted_count > 0

    async def delete_all(self) -> int:
        """Delete every notification"""

        result = await self.notifications.delete_many({})
        logger.info(f"Deleted {result.deleted_count} notifications")

        return result.deleted_count

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    def _doc_to_notification(self, doc: Dict[str, Any]) -> Notification:
        """Convert document to Notification"""
        return Notification(
            id=str(doc["_id"]),
            type=NotificationType(doc.get("type", NotificationType.INFO.value)),
            title=doc["title"],
            body=doc.get("body"),
            is_read=doc.get("is_read", False),
            link_path=doc.get("link_path"),
            entity_type=doc.get("entity_type"),
            entity_id=doc.get("entity_id"),
            meta=doc.get("meta") or {},
            created_at=doc["created_at"].isoformat()
        )
