from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, Field

from .enums import ComplaintPriority, NotificationType


class Notification(BaseModel):
    id: str
    title: str
    message: str
    type: NotificationType = NotificationType.info
    priority: ComplaintPriority = ComplaintPriority.low
    is_read: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
    related_complaint_id: Optional[str] = None
    action_required: bool = False


class NotificationSummary(BaseModel):
    total: int
    unread: int
    action_required: int          # unread ones only
    by_type: Dict[str, int]
