# core/notifications.py

import uuid
from collections import Counter, defaultdict
from threading import Lock
from typing import Dict, List, Optional

from core.logging_config import logger
from models.enums import ComplaintPriority, NotificationType
from models.notification import Notification, NotificationSummary


FILTERS = ("all", "unread", "action-required")

# Oldest notifications beyond this are dropped
MAX_INBOX_SIZE = 100


# -----------------------------------------------------
# Per-user notification inbox (in-process)
# -----------------------------------------------------
class NotificationCenter:

    def __init__(self):
        self._inboxes: Dict[str, List[Notification]] = defaultdict(list)
        self._lock = Lock()

    def push(
        self,
        user_id: str,
        title: str,
        message: str,
        type: NotificationType = NotificationType.info,
        priority: ComplaintPriority = ComplaintPriority.low,
        related_complaint_id: Optional[str] = None,
        action_required: bool = False,
    ) -> Notification:
        notification = Notification(
            id=uuid.uuid4().hex,
            title=title,
            message=message,
            type=type,
            priority=priority,
            related_complaint_id=related_complaint_id,
            action_required=action_required,
        )
        with self._lock:
            # Newest first
            inbox = self._inboxes[user_id]
            inbox.insert(0, notification)
            del inbox[MAX_INBOX_SIZE:]
        logger.info(f"Notification for {user_id}: {title}")
        return notification

    def list(self, user_id: str, filter: str = "all") -> List[Notification]:
        if filter not in FILTERS:
            raise ValueError(f"Unknown notification filter: {filter!r}")
        with self._lock:
            items = list(self._inboxes.get(user_id, []))
        if filter == "unread":
            return [n for n in items if not n.is_read]
        if filter == "action-required":
            return [n for n in items if n.action_required]
        return items

    def summary(self, user_id: str) -> NotificationSummary:
        with self._lock:
            items = list(self._inboxes.get(user_id, []))
        return NotificationSummary(
            total=len(items),
            unread=sum(1 for n in items if not n.is_read),
            action_required=sum(1 for n in items if n.action_required and not n.is_read),
            by_type=dict(Counter(n.type.value for n in items)),
        )

    def mark_read(self, user_id: str, notification_id: str) -> bool:
        with self._lock:
            for n in self._inboxes.get(user_id, []):
                if n.id == notification_id:
                    n.is_read = True
                    return True
        return False

    def mark_all_read(self, user_id: str) -> int:
        with self._lock:
            unread = [n for n in self._inboxes.get(user_id, []) if not n.is_read]
            for n in unread:
                n.is_read = True
        return len(unread)

    def delete(self, user_id: str, notification_id: str) -> bool:
        with self._lock:
            items = self._inboxes.get(user_id, [])
            kept = [n for n in items if n.id != notification_id]
            if len(kept) == len(items):
                return False
            self._inboxes[user_id] = kept
        return True

    def clear(self):
        with self._lock:
            self._inboxes.clear()


notification_center = NotificationCenter()


def get_notification_center() -> NotificationCenter:
    return notification_center


# -----------------------------------------------------
# Complaint events → notifications
# -----------------------------------------------------
def notify_critical_complaint(recipient_ids: List[str], complaint_id: str, title: str, region: str):
    for user_id in recipient_ids:
        notification_center.push(
            user_id,
            title="Critical Complaint Reported",
            message=f"{title} ({region}). Immediate attention required.",
            type=NotificationType.error,
            priority=ComplaintPriority.critical,
            related_complaint_id=complaint_id,
            action_required=True,
        )


def notify_assignment(assignee_id: str, complaint_id: str, title: str, assigned_by: str):
    notification_center.push(
        assignee_id,
        title="New Complaint Assignment",
        message=f"You have been assigned '{title}' by {assigned_by}.",
        type=NotificationType.info,
        priority=ComplaintPriority.medium,
        related_complaint_id=complaint_id,
        action_required=True,
    )
