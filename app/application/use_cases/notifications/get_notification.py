"""Use case for retrieving a single notification."""

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.domain.errors import NotificationNotFoundError
from app.domain.services import is_visible_to
from app.infrastructure.repositories import NotificationRepository


def get_notification(
    session: Session, *, notification_id: str, viewer_id: str | None = None
) -> Notification:
    """Return the notification or raise when it is missing or hidden from ``viewer_id``."""

    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotificationNotFoundError("Notification not found")
    if viewer_id is not None and not is_visible_to(viewer_id, notification):
        raise NotificationNotFoundError("Notification not found")
    return notification
