"""Read-side use cases returning the notifications a viewer may see."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import STATUS_ACTIVE, Notification
from app.domain.services import effective_status_of, is_visible_to
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone
from .validators import ensure_status


def _visible_notifications(session: Session, viewer_id: str) -> list[Notification]:
    notifications = NotificationRepository(session).list_for_user(viewer_id)
    return [n for n in notifications if is_visible_to(viewer_id, n)]


def list_notifications(
    session: Session,
    *,
    viewer_id: str,
    status: str | None = None,
    limit: int | None = None,
    now: datetime | None = None,
) -> Sequence[Notification]:
    """Return the viewer's notifications ordered by priority, newest first on ties.

    ``status`` filters on the effective status, so an active notification
    past its expiry is listed as expired.
    """

    if status is not None:
        ensure_status(status)
    limit = limit or get_settings().notification_list_limit
    now = now or now_in_app_timezone()

    notifications = _visible_notifications(session, viewer_id)
    if status is not None:
        notifications = [n for n in notifications if effective_status_of(n, now) == status]
    return notifications[:limit]


def get_suggested_actions(
    session: Session,
    *,
    viewer_id: str,
    now: datetime | None = None,
) -> Sequence[Notification]:
    """Return the highest ranked active notifications for the suggested actions panel."""

    now = now or now_in_app_timezone()
    suggestions = [
        notification
        for notification in _visible_notifications(session, viewer_id)
        if notification.shows_in_suggested_actions()
        and effective_status_of(notification, now) == STATUS_ACTIVE
    ]
    return suggestions[: get_settings().suggested_actions_limit]


def count_active_notifications(
    session: Session,
    *,
    viewer_id: str,
    now: datetime | None = None,
) -> int:
    """Return how many visible notifications are still effectively active."""

    now = now or now_in_app_timezone()
    return sum(
        1
        for notification in _visible_notifications(session, viewer_id)
        if effective_status_of(notification, now) == STATUS_ACTIVE
    )


__all__ = ["count_active_notifications", "get_suggested_actions", "list_notifications"]
