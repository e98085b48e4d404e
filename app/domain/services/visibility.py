"""Decide which party of a transfer may see a notification."""

from __future__ import annotations

from typing import Final

from app.domain.entities import (
    ROLE_RECIPIENT,
    ROLE_SENDER,
    VISIBILITY_BOTH,
    VISIBILITY_RECIPIENT_ONLY,
    VISIBILITY_SENDER_ONLY,
    Notification,
    opposite_role,
)
from app.domain.errors import InvalidArgumentError

RELATIONSHIP_UNRELATED: Final[str] = "unrelated"

_ALLOWED_ROLES: Final[dict[str, frozenset[str]]] = {
    VISIBILITY_BOTH: frozenset({ROLE_SENDER, ROLE_RECIPIENT}),
    VISIBILITY_SENDER_ONLY: frozenset({ROLE_SENDER}),
    VISIBILITY_RECIPIENT_ONLY: frozenset({ROLE_RECIPIENT}),
}


def is_visible(visibility: str, relationship: str | None) -> bool:
    """Return ``True`` when a viewer with ``relationship`` may see the notification.

    ``relationship`` is ``"sender"``, ``"recipient"`` or anything else for an
    unrelated viewer, who never sees the notification.
    """

    allowed = _ALLOWED_ROLES.get(visibility) if isinstance(visibility, str) else None
    if allowed is None:
        raise InvalidArgumentError(f"Unknown visibility: {visibility!r}")
    return relationship in allowed


def resolve_viewer_relationship(viewer_id: str | None, notification: Notification) -> str:
    """Return how ``viewer_id`` relates to the event behind ``notification``.

    The owner takes the side recorded in ``metadata.role`` (recipient when the
    record does not say), the counterparty takes the opposite side.
    """

    if not viewer_id:
        return RELATIONSHIP_UNRELATED
    owner_role = notification.metadata.role or ROLE_RECIPIENT
    if viewer_id == notification.user_id:
        return owner_role
    if viewer_id == notification.metadata.counterparty_id:
        return opposite_role(owner_role)
    return RELATIONSHIP_UNRELATED


def is_visible_to(viewer_id: str | None, notification: Notification) -> bool:
    """Shortcut combining :func:`resolve_viewer_relationship` and :func:`is_visible`."""

    relationship = resolve_viewer_relationship(viewer_id, notification)
    return is_visible(notification.metadata.visibility, relationship)


__all__ = [
    "RELATIONSHIP_UNRELATED",
    "is_visible",
    "is_visible_to",
    "resolve_viewer_relationship",
]
