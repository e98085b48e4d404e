"""Use cases for creating, reading and closing notifications."""

from .cleanup_old_notifications import cleanup_old_notifications
from .create_notification import create_notification
from .get_notification import get_notification
from .list_notifications import (
    count_active_notifications,
    get_suggested_actions,
    list_notifications,
)
from .update_notification_status import (
    expire_notifications,
    mark_notifications_as_read,
    update_notification_status,
)

__all__ = [
    "cleanup_old_notifications",
    "count_active_notifications",
    "create_notification",
    "expire_notifications",
    "get_notification",
    "get_suggested_actions",
    "list_notifications",
    "mark_notifications_as_read",
    "update_notification_status",
]
