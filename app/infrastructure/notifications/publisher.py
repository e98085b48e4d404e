"""Utility helpers to push toast notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from app.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task[Any]] = set()

    def dispatch(self, notification: Notification) -> bool:
        """Schedule ``notification`` for its owner; return whether it was queued."""

        if not notification.shows_as_toast():
            return False
        if not self._manager.has_connections(notification.user_id):
            return False

        message = {"type": "notification", "data": serialize_notification(notification)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_to_user, notification.user_id, message)
            except RuntimeError as exc:
                logger.warning(
                    "No event loop available to push notification %s: %s",
                    notification.id,
                    exc,
                )
                return False
        else:
            task = loop.create_task(self._manager.send_to_user(notification.user_id, message))
            self._pending.add(task)
            task.add_done_callback(self._on_sent)
        return True

    def _on_sent(self, task: asyncio.Task[Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Toast push failed: %s", exc)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    metadata = notification.metadata
    payment = metadata.payment_data
    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "type": notification.type,
        "title": notification.title,
        "description": notification.description,
        "status": notification.status,
        "display_location": notification.display_location,
        "priority": {
            "base": notification.priority.base,
            "calculated_priority": notification.priority.calculated_priority,
        },
        "metadata": {
            "gradient": metadata.gradient,
            "action_required": metadata.action_required,
            "dismissible": metadata.dismissible,
            "visibility": metadata.visibility,
            "role": metadata.role,
            "expires_at": metadata.expires_at.isoformat() if metadata.expires_at else None,
            "related_entity_id": metadata.related_entity_id,
            "related_entity_type": metadata.related_entity_type,
            "counterparty_id": metadata.counterparty_id,
            "parent_notification_id": metadata.parent_notification_id,
            "payment_data": (
                {
                    "amount": payment.amount,
                    "currency": payment.currency,
                    "type": payment.type,
                    "status": payment.status,
                }
                if payment
                else None
            ),
        },
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
        "updated_at": notification.updated_at.isoformat()
        if notification.updated_at
        else None,
    }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> bool:
    """Public helper that delegates to the shared publisher instance."""

    return notification_publisher.dispatch(notification)


__all__ = [
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
    "serialize_notification",
]
