"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from app.domain.entities import (
    STATUS_ACTIVE,
    TERMINAL_STATUSES,
    Notification,
    NotificationMetadata,
    NotificationPriority,
    PaymentData,
    PriorityModifiers,
)
from app.domain.errors import InvalidTransitionError
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)


def _json_amount(amount: Any) -> Any:
    """Return ``amount`` in a form the JSON columns can store."""

    if isinstance(amount, Decimal):
        return int(amount) if amount == amount.to_integral_value() else float(amount)
    return amount


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model is not None else None

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int | None = None,
    ) -> Sequence[Notification]:
        query = (
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(
                NotificationModel.calculated_priority.desc(),
                NotificationModel.created_at.desc(),
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in self.session.scalars(query)]

    def list_children(self, parent_id: str) -> Sequence[Notification]:
        query = select(NotificationModel).where(
            NotificationModel.parent_notification_id == parent_id
        )
        return [self._to_entity(model) for model in self.session.scalars(query)]

    def list_expirable(self, now: datetime) -> Sequence[Notification]:
        """Return active notifications whose expiry lies before ``now``."""

        cutoff = ensure_app_naive_datetime(now)
        query = (
            select(NotificationModel)
            .where(NotificationModel.status == STATUS_ACTIVE)
            .where(NotificationModel.expires_at.is_not(None))
            .where(NotificationModel.expires_at < cutoff)
        )
        return [self._to_entity(model) for model in self.session.scalars(query)]

    def create(self, notification: Notification) -> Notification:
        """Stage ``notification`` in the current transaction and return it with its id.

        The caller owns the transaction and decides when to commit.
        """

        model = NotificationModel(id=notification.id or uuid4().hex)
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.flush()
        self.session.refresh(model)
        return self._to_entity(model)

    def compare_and_set_status(
        self, notification: Notification, *, expected_status: str
    ) -> Notification:
        """Persist ``notification``'s status only if the stored one is unchanged.

        Raises :class:`InvalidTransitionError` when another writer moved the
        record first; nothing is written in that case. The write joins the
        current transaction and is committed by the caller.
        """

        if notification.id is None:
            raise ValueError("Notification id is required for updates")

        statement = (
            update(NotificationModel)
            .where(NotificationModel.id == notification.id)
            .where(NotificationModel.status == expected_status)
            .values(
                status=notification.status,
                metadata_payload=self._serialize_metadata(notification.metadata),
                updated_at=ensure_app_naive_datetime(
                    notification.updated_at or now_in_app_timezone()
                ),
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(statement)
        if result.rowcount != 1:
            logger.warning(
                "Status write for notification %s lost the race (expected %s)",
                notification.id,
                expected_status,
            )
            raise InvalidTransitionError(
                f"Notification {notification.id} is no longer {expected_status}"
            )
        self.session.expire_all()
        stored = self.get(notification.id)
        if stored is None:  # pragma: no cover - deleted concurrently
            raise InvalidTransitionError(f"Notification {notification.id} disappeared")
        return stored

    def delete_terminal_before(
        self, user_id: str, older_than: datetime, *, batch_size: int = 50
    ) -> int:
        """Delete terminal notifications created before ``older_than``."""

        cutoff = ensure_app_naive_datetime(older_than)
        ids = list(
            self.session.scalars(
                select(NotificationModel.id)
                .where(NotificationModel.user_id == user_id)
                .where(NotificationModel.status.in_(sorted(TERMINAL_STATUSES)))
                .where(NotificationModel.created_at < cutoff)
            )
        )
        for start in range(0, len(ids), batch_size):
            batch = ids[start : start + batch_size]
            self.session.execute(
                delete(NotificationModel)
                .where(NotificationModel.id.in_(batch))
                .execution_options(synchronize_session=False)
            )
            self.session.commit()
        return len(ids)

    @classmethod
    def _apply_entity_to_model(
        cls, model: NotificationModel, notification: Notification
    ) -> None:
        now = now_in_app_timezone()
        priority = notification.priority
        metadata = notification.metadata
        model.user_id = notification.user_id
        model.type = notification.type
        model.title = notification.title
        model.description = notification.description
        model.status = notification.status
        model.priority_base = priority.base
        model.priority_modifiers = {
            "action_required": priority.modifiers.action_required,
            "time_constraint": priority.modifiers.time_constraint,
            "amount": _json_amount(priority.modifiers.amount),
            "role": priority.modifiers.role,
        }
        model.calculated_priority = priority.calculated_priority
        model.display_location = notification.display_location
        model.metadata_payload = cls._serialize_metadata(metadata)
        model.counterparty_id = metadata.counterparty_id
        model.parent_notification_id = metadata.parent_notification_id
        model.expires_at = ensure_app_naive_datetime(metadata.expires_at)
        model.created_at = ensure_app_naive_datetime(notification.created_at or now)
        model.updated_at = ensure_app_naive_datetime(notification.updated_at or now)

    @staticmethod
    def _serialize_metadata(metadata: NotificationMetadata) -> dict[str, Any]:
        payment = metadata.payment_data
        return {
            "gradient": metadata.gradient,
            "action_required": metadata.action_required,
            "dismissible": metadata.dismissible,
            "visibility": metadata.visibility,
            "role": metadata.role,
            "related_entity_id": metadata.related_entity_id,
            "related_entity_type": metadata.related_entity_type,
            "payment_data": (
                {
                    "amount": _json_amount(payment.amount),
                    "currency": payment.currency,
                    "type": payment.type,
                    "status": payment.status,
                }
                if payment is not None
                else None
            ),
        }

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        modifiers = model.priority_modifiers or {}
        payload = model.metadata_payload or {}
        payment = payload.get("payment_data")
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            description=model.description,
            status=model.status,
            priority=NotificationPriority(
                base=model.priority_base,
                modifiers=PriorityModifiers(
                    action_required=bool(modifiers.get("action_required")),
                    time_constraint=bool(modifiers.get("time_constraint")),
                    amount=modifiers.get("amount", 0),
                    role=modifiers.get("role"),
                ),
                calculated_priority=model.calculated_priority,
            ),
            display_location=model.display_location,
            metadata=NotificationMetadata(
                gradient=payload.get("gradient", ""),
                action_required=bool(payload.get("action_required")),
                dismissible=bool(payload.get("dismissible", True)),
                visibility=payload.get("visibility"),
                expires_at=ensure_app_timezone(model.expires_at),
                related_entity_id=payload.get("related_entity_id"),
                related_entity_type=payload.get("related_entity_type"),
                counterparty_id=model.counterparty_id,
                role=payload.get("role"),
                parent_notification_id=model.parent_notification_id,
                payment_data=PaymentData(**payment) if payment else None,
            ),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository"]
