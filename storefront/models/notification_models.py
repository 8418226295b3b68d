"""
Notification Models
Admin dashboard notifications with deep links
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from enum import Enum

# ============================================================================
# Enums
# ============================================================================

class NotificationType(str, Enum):
    """Notification severity / badge type"""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

# ============================================================================
# Notification Models
# ============================================================================

class NotificationCreate(BaseModel):
    """Create notification request"""
    type: NotificationType = NotificationType.INFO
    title: str = Field(min_length=1, max_length=200)
    body: Optional[str] = Field(default=None, max_length=2000)

    # Deep link
    link_path: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    meta: Dict[str, Any] = {}

class Notification(BaseModel):
    """Notification model"""
    id: str
    type: NotificationType

    # Content
    title: str
    body: Optional[str] = None
    is_read: bool = False

    # Deep link
    link_path: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    meta: Dict[str, Any] = {}

    created_at: str

class NotificationListResponse(BaseModel):
    """List of notifications"""
    notifications: List[Notification]
    total: int
    unread_count: int
