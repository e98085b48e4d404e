"""Aggregate application use cases."""

from .notifications import (
    create_notification,
    expire_notifications,
    update_notification_status,
)

__all__ = [
    "create_notification",
    "expire_notifications",
    "update_notification_status",
]
