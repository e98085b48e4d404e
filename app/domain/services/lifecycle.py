"""Status state machine for notifications.

``active`` is the only non-terminal state; it may move once to ``dismissed``,
``actioned`` or ``expired``. Expiry is also reported on read for active
records whose ``expires_at`` has passed, without touching stored state.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from app.domain.entities import (
    NOTIFICATION_STATUSES,
    PAYMENT_STATUS_EXPIRED,
    PAYMENT_STATUS_PENDING,
    STATUS_ACTIONED,
    STATUS_ACTIVE,
    STATUS_DISMISSED,
    STATUS_EXPIRED,
    TERMINAL_STATUSES,
    Notification,
)
from app.domain.errors import InvalidArgumentError, InvalidTransitionError
from app.utils import ensure_app_timezone, now_in_app_timezone


def validate_transition(current_status: str, requested_status: str) -> None:
    """Raise :class:`InvalidTransitionError` unless ``current -> requested`` is allowed."""

    for value in (current_status, requested_status):
        if value not in NOTIFICATION_STATUSES:
            raise InvalidArgumentError(f"Unknown notification status: {value!r}")

    if current_status in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            f"Notification is already {current_status} and cannot become {requested_status}"
        )
    if requested_status not in TERMINAL_STATUSES:
        raise InvalidTransitionError(
            f"Cannot move a notification from {current_status} to {requested_status}"
        )


def is_expired(expires_at: datetime | None, now: datetime | None = None) -> bool:
    """Return ``True`` when ``expires_at`` lies strictly before ``now``."""

    if expires_at is None:
        return False
    reference = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    return ensure_app_timezone(expires_at) < reference


def effective_status(
    status: str, expires_at: datetime | None, now: datetime | None = None
) -> str:
    """Return the status a reader should observe for a stored notification."""

    if status == STATUS_ACTIVE and is_expired(expires_at, now):
        return STATUS_EXPIRED
    return status


def effective_status_of(notification: Notification, now: datetime | None = None) -> str:
    return effective_status(notification.status, notification.metadata.expires_at, now)


def transition(
    notification: Notification,
    requested_status: str,
    *,
    now: datetime | None = None,
    payment_status: str | None = None,
) -> Notification:
    """Return a copy of ``notification`` moved to ``requested_status``."""

    validate_transition(notification.status, requested_status)
    metadata = notification.metadata
    if payment_status is not None and metadata.payment_data is not None:
        metadata = replace(
            metadata, payment_data=replace(metadata.payment_data, status=payment_status)
        )
    return replace(
        notification,
        status=requested_status,
        metadata=metadata,
        updated_at=now or now_in_app_timezone(),
    )


def dismiss(
    notification: Notification,
    *,
    now: datetime | None = None,
    payment_status: str | None = None,
) -> Notification:
    """Dismiss an active notification the user chose to hide."""

    if not notification.metadata.dismissible and notification.status == STATUS_ACTIVE:
        raise InvalidTransitionError("Notification cannot be dismissed")
    return transition(
        notification, STATUS_DISMISSED, now=now, payment_status=payment_status
    )


def action(
    notification: Notification,
    *,
    now: datetime | None = None,
    payment_status: str | None = None,
) -> Notification:
    """Mark an active notification as acted upon."""

    return transition(notification, STATUS_ACTIONED, now=now, payment_status=payment_status)


def expire(notification: Notification, *, now: datetime | None = None) -> Notification:
    """Persistently expire a notification; pending payments expire with it."""

    payment = notification.metadata.payment_data
    payment_status = (
        PAYMENT_STATUS_EXPIRED
        if payment is not None and payment.status == PAYMENT_STATUS_PENDING
        else None
    )
    return transition(notification, STATUS_EXPIRED, now=now, payment_status=payment_status)


__all__ = [
    "action",
    "dismiss",
    "effective_status",
    "effective_status_of",
    "expire",
    "is_expired",
    "transition",
    "validate_transition",
]
