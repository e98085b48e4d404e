"""Validation helpers for notification use cases."""

from __future__ import annotations

from collections.abc import Collection

from app.domain.entities import (
    DISPLAY_LOCATIONS,
    NOTIFICATION_STATUSES,
    NOTIFICATION_TYPES,
    PAYMENT_STATUSES,
    PAYMENT_TYPES,
    ROLES,
    VISIBILITY_VALUES,
    NotificationMetadata,
)
from app.domain.errors import InvalidArgumentError


def ensure_choice(value: object, choices: Collection[str], *, field: str) -> str:
    """Return ``value`` when it belongs to ``choices`` or raise an error."""

    if not isinstance(value, str) or value not in choices:
        allowed = ", ".join(sorted(choices))
        raise InvalidArgumentError(f"Invalid {field} {value!r}; expected one of: {allowed}")
    return value


def ensure_notification_type(value: object) -> str:
    return ensure_choice(value, NOTIFICATION_TYPES, field="notification type")


def ensure_display_location(value: object) -> str:
    return ensure_choice(value, DISPLAY_LOCATIONS, field="display location")


def ensure_status(value: object) -> str:
    return ensure_choice(value, NOTIFICATION_STATUSES, field="status")


def ensure_payment_status(value: object) -> str:
    return ensure_choice(value, PAYMENT_STATUSES, field="payment status")


def ensure_metadata(metadata: NotificationMetadata) -> NotificationMetadata:
    """Validate the enumerated fields carried by ``metadata``."""

    ensure_choice(metadata.visibility, VISIBILITY_VALUES, field="visibility")
    if metadata.role is not None:
        ensure_choice(metadata.role, ROLES, field="role")
    payment = metadata.payment_data
    if payment is not None:
        ensure_choice(payment.type, PAYMENT_TYPES, field="payment type")
        ensure_payment_status(payment.status)
    return metadata
