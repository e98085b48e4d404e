"""Use case for creating notifications, including the counterparty copy."""

from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import (
    STATUS_ACTIVE,
    Notification,
    NotificationMetadata,
    NotificationPriority,
    PriorityModifiers,
    opposite_role,
)
from app.domain.services import compute_priority, is_visible
from app.infrastructure.database import atomic
from app.infrastructure.notifications import dispatch_notification
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone
from .validators import ensure_display_location, ensure_metadata, ensure_notification_type

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    *,
    user_id: str,
    type: str,
    title: str,
    description: str,
    priority_base: str,
    modifiers: PriorityModifiers,
    display_location: str,
    metadata: NotificationMetadata,
) -> Notification:
    """Persist a new active notification and return it.

    The owner's side defaults to the role used for scoring. When the event has
    a counterparty whose side is allowed to see it, a mirrored record is
    stored for them with the opposite role, its own score and a link back to
    this one. Both records are committed together or not at all.
    """

    ensure_notification_type(type)
    ensure_display_location(display_location)
    ensure_metadata(metadata)
    calculated_priority = compute_priority(priority_base, modifiers)
    if metadata.role is None:
        metadata = replace(metadata, role=modifiers.role)

    now = now_in_app_timezone()
    repository = NotificationRepository(session)
    mirrored: Notification | None = None
    with atomic(session):
        notification = repository.create(
            Notification(
                id=None,
                user_id=user_id,
                type=type,
                title=title,
                description=description,
                status=STATUS_ACTIVE,
                priority=NotificationPriority(
                    base=priority_base,
                    modifiers=modifiers,
                    calculated_priority=calculated_priority,
                ),
                display_location=display_location,
                metadata=metadata,
                created_at=now,
                updated_at=now,
            )
        )
        if _has_visible_counterparty(notification):
            mirrored = _create_counterparty_copy(repository, notification)

    dispatch_notification(notification)
    if mirrored is not None:
        logger.info(
            "Created counterparty notification %s for %s (parent %s)",
            mirrored.id,
            mirrored.user_id,
            notification.id,
        )
        dispatch_notification(mirrored)
    return notification


def _has_visible_counterparty(notification: Notification) -> bool:
    metadata = notification.metadata
    if not metadata.counterparty_id or metadata.counterparty_id == notification.user_id:
        return False
    return is_visible(metadata.visibility, opposite_role(metadata.role))


def _create_counterparty_copy(
    repository: NotificationRepository, parent: Notification
) -> Notification:
    role = opposite_role(parent.metadata.role)
    modifiers = replace(parent.priority.modifiers, role=role)
    return repository.create(
        replace(
            parent,
            id=None,
            user_id=parent.metadata.counterparty_id,
            priority=NotificationPriority(
                base=parent.priority.base,
                modifiers=modifiers,
                calculated_priority=compute_priority(parent.priority.base, modifiers),
            ),
            metadata=replace(
                parent.metadata,
                role=role,
                counterparty_id=parent.user_id,
                parent_notification_id=parent.id,
            ),
        )
    )


__all__ = ["create_notification"]
