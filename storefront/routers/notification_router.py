"""
Notification Router
API endpoints for notification management
"""

from fastapi import APIRouter, HTTPException, Depends, status, Query
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from storefront.config import Settings, get_settings
from storefront.database import get_database
from storefront.dependencies import get_quota_notifier, get_usage_client
from storefront.exceptions import StorefrontError
from storefront.middleware.auth_middleware import verify_api_key
from storefront.models.notification_models import (
    NotificationCreate, Notification, NotificationListResponse, NotificationType
)
from storefront.services.cloudinary_client import CloudinaryUsageClient
from storefront.services.notification_service import NotificationService
from storefront.services.quota_manager import QuotaNotifier, run_quota_check

logger = logging.getLogger(__name__)

router = APIRouter()

# ============================================================================
# QUOTA CHECK
# ============================================================================

@router.post("/notifications/refresh")
async def refresh_quota_notifications(
    usage_client: CloudinaryUsageClient = Depends(get_usage_client),
    notifier: QuotaNotifier = Depends(get_quota_notifier),
    settings: Settings = Depends(get_settings),
    current_admin: dict = Depends(verify_api_key)
):
    """
    Run the storage quota check now

    Creates at most one "disk nearly full" notification per tier per day.
    """

    try:
        result = await run_quota_check(
            usage_client,
            notifier,
            settings.STORAGE_CAPACITY_BYTES,
            settings.STORAGE_WARNING_PERCENT,
            settings.STORAGE_CRITICAL_PERCENT
        )
    except StorefrontError as e:
        logger.error(f"Quota check failed: {e.message}")
        return JSONResponse(
            status_code=e.status_code,
            content={"ok": False, "error": e.message}
        )

    if not result.has_data:
        return {"ok": True, "note": "no storage info"}

    return {
        "ok": True,
        "percent": result.sample.percent,
        "tier": result.sample.tier.value,
        "notification": result.notification.model_dump() if result.notification else None
    }

# ============================================================================
# NOTIFICATIONS
# ============================================================================

@router.post("/notifications", response_model=Notification, status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: NotificationCreate,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """
    Create a notification

    Note: Notifications are usually created by the quota check.
    This endpoint is for manual notifications.
    """

    notif_service = NotificationService(db)
    return await notif_service.create_notification(request)


@router.get("/notifications", response_model=NotificationListResponse)
async def list_notifications(
    unread_only: bool = Query(False, description="Show only unread notifications"),
    type: Optional[NotificationType] = None,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """
    List notifications, newest first

    Filters:
    - unread_only: Show only unread notifications
    - type: Filter by notification type
    """

    notif_service = NotificationService(db)

    notifications, total, unread_count = await notif_service.list_notifications(
        unread_only=unread_only,
        notif_type=type
    )

    return NotificationListResponse(
        notifications=notifications,
        total=total,
        unread_count=unread_count
    )


@router.post("/notifications/read-all")
async def mark_all_notifications_as_read(
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Mark all notifications as read"""

    notif_service = NotificationService(db)
    count = await notif_service.mark_all_as_read()

    return {"success": True, "marked_count": count}


@router.get("/notifications/{notification_id}", response_model=Notification)
async def get_notification(
    notification_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Get notification by ID"""

    notif_service = NotificationService(db)
    notification = await notif_service.get_notification(notification_id)

    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification {notification_id} not found"
        )

    return notification


@router.post("/notifications/{notification_id}/read")
async def mark_notification_as_read(
    notification_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Mark notification as read"""

    notif_service = NotificationService(db)

    if not await notif_service.mark_as_read(notification_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification {notification_id} not found"
        )

    return {"success": True, "notification_id": notification_id, "is_read": True}


@router.post("/notifications/{notification_id}/unread")
async def mark_notification_as_unread(
    notification_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Mark notification as unread"""

    notif_service = NotificationService(db)

    if not await notif_service.mark_as_unread(notification_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification {notification_id} not found"
        )

    return {"success": True, "notification_id": notification_id, "is_read": False}


@router.delete("/notifications/{notification_id}")
async def delete_notification(
    notification_id: str,
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Delete notification"""

    notif_service = NotificationService(db)

    if not await notif_service.delete_notification(notification_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification {notification_id} not found"
        )

    return {"success": True, "message": "Notification deleted"}


@router.delete("/notifications")
async def delete_all_notifications(
    db=Depends(get_database),
    current_admin: dict = Depends(verify_api_key)
):
    """Delete every notification"""

    notif_service = NotificationService(db)
    count = await notif_service.delete_all()

    return {"success": True, "deleted_count": count}
