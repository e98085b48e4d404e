"""Use cases moving notifications through their lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import (
    STATUS_DISMISSED,
    STATUS_EXPIRED,
    Notification,
)
from app.domain.errors import InvalidTransitionError, NotificationNotFoundError
from app.domain.services import dismiss, expire, is_visible_to, transition
from app.infrastructure.database import atomic
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone
from .validators import ensure_payment_status, ensure_status

logger = logging.getLogger(__name__)


def _apply(
    notification: Notification,
    status: str,
    *,
    now: datetime,
    payment_status: str | None,
    enforce_dismissible: bool,
) -> Notification:
    if status == STATUS_EXPIRED and payment_status is None:
        return expire(notification, now=now)
    if status == STATUS_DISMISSED and enforce_dismissible:
        return dismiss(notification, now=now, payment_status=payment_status)
    return transition(notification, status, now=now, payment_status=payment_status)


def _propagate(
    repository: NotificationRepository,
    notification: Notification,
    status: str,
    *,
    now: datetime,
    payment_status: str | None,
) -> int:
    """Move the other half of a sender/recipient pair along with ``notification``."""

    related: list[Notification] = []
    parent_id = notification.metadata.parent_notification_id
    if parent_id:
        parent = repository.get(parent_id)
        if parent is not None:
            related.append(parent)
    related.extend(repository.list_children(notification.id))

    moved = 0
    for other in related:
        if other.is_terminal:
            continue
        updated = _apply(
            other, status, now=now, payment_status=payment_status, enforce_dismissible=False
        )
        try:
            repository.compare_and_set_status(updated, expected_status=other.status)
        except InvalidTransitionError:
            logger.warning(
                "Related notification %s changed concurrently; left as is", other.id
            )
            continue
        moved += 1
    return moved


def update_notification_status(
    session: Session,
    *,
    notification_id: str,
    status: str,
    viewer_id: str | None = None,
    payment_status: str | None = None,
    now: datetime | None = None,
) -> Notification:
    """Transition a notification and its paired record to ``status``.

    When ``viewer_id`` is given only the owner may change the record; anyone
    else is told it does not exist. The record and its pair are committed
    together; if either write fails neither is kept.
    """

    ensure_status(status)
    if payment_status is not None:
        ensure_payment_status(payment_status)
    now = now or now_in_app_timezone()

    repository = NotificationRepository(session)
    current = repository.get(notification_id)
    if current is None:
        raise NotificationNotFoundError("Notification not found")
    if viewer_id is not None and (
        viewer_id != current.user_id or not is_visible_to(viewer_id, current)
    ):
        raise NotificationNotFoundError("Notification not found")

    updated = _apply(
        current, status, now=now, payment_status=payment_status, enforce_dismissible=True
    )
    with atomic(session):
        saved = repository.compare_and_set_status(updated, expected_status=current.status)
        _propagate(repository, saved, status, now=now, payment_status=payment_status)
    return saved


def mark_notifications_as_read(
    session: Session,
    *,
    notification_ids: Iterable[str],
    viewer_id: str,
    now: datetime | None = None,
) -> list[str]:
    """Dismiss every listed notification the viewer owns; return the dismissed ids.

    Unknown, foreign, already closed and non-dismissible notifications are
    skipped rather than failing the whole batch.
    """

    now = now or now_in_app_timezone()
    dismissed: list[str] = []
    seen: set[str] = set()
    for notification_id in notification_ids:
        if not notification_id or notification_id in seen:
            continue
        seen.add(notification_id)
        try:
            update_notification_status(
                session,
                notification_id=notification_id,
                status=STATUS_DISMISSED,
                viewer_id=viewer_id,
                now=now,
            )
        except (NotificationNotFoundError, InvalidTransitionError) as exc:
            logger.info("Skipping notification %s: %s", notification_id, exc)
            continue
        dismissed.append(notification_id)
    return dismissed


def expire_notifications(session: Session, *, now: datetime | None = None) -> int:
    """Persist the expiry of active notifications whose deadline has passed.

    Returns the number of records moved to ``expired``, paired records
    included. Running the sweep twice in a row expires nothing the second time.
    """

    now = now or now_in_app_timezone()
    repository = NotificationRepository(session)
    expired = 0
    for notification in repository.list_expirable(now):
        current = repository.get(notification.id)
        if current is None or current.is_terminal:
            continue
        try:
            with atomic(session):
                saved = repository.compare_and_set_status(
                    expire(current, now=now), expected_status=current.status
                )
                moved = _propagate(
                    repository, saved, STATUS_EXPIRED, now=now, payment_status=None
                )
        except InvalidTransitionError:
            continue
        expired += 1 + moved

    if expired:
        logger.info("Expired %s notification(s)", expired)
    return expired


__all__ = [
    "expire_notifications",
    "mark_notifications_as_read",
    "update_notification_status",
]
