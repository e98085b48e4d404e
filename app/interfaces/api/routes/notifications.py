"""Endpoints and websocket handler for wallet notifications."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    cleanup_old_notifications as cleanup_old_notifications_uc,
    count_active_notifications as count_active_notifications_uc,
    create_notification as create_notification_uc,
    expire_notifications as expire_notifications_uc,
    get_notification as get_notification_uc,
    get_suggested_actions as get_suggested_actions_uc,
    list_notifications as list_notifications_uc,
    mark_notifications_as_read as mark_notifications_as_read_uc,
    update_notification_status as update_notification_status_uc,
)
from app.domain.entities import (
    STATUS_ACTIONED,
    STATUS_DISMISSED,
    STATUS_EXPIRED,
    Notification,
    NotificationMetadata,
    PaymentData,
    PriorityModifiers,
)
from app.domain.errors import (
    InvalidArgumentError,
    InvalidTransitionError,
    NotificationError,
    NotificationNotFoundError,
)
from app.domain.services import effective_status_of
from app.infrastructure.database import get_db
from app.infrastructure.notifications import notification_manager
from app.interfaces.api.dependencies import get_viewer_id
from app.interfaces.api.schemas import (
    CleanupResponse,
    ExpireSweepResponse,
    NotificationCountRead,
    NotificationCreate,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationMetadataRead,
    NotificationRead,
    NotificationStatusUpdate,
    PaymentDataSchema,
    PriorityModifiersSchema,
    PriorityRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)


def _raise_http(exc: NotificationError) -> NoReturn:
    if isinstance(exc, NotificationNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidTransitionError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, InvalidArgumentError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=code, detail=str(exc)) from exc


def _notification_to_schema(notification: Notification) -> NotificationRead:
    priority = notification.priority
    metadata = notification.metadata
    payment = metadata.payment_data
    return NotificationRead(
        id=notification.id,
        user_id=notification.user_id,
        type=notification.type,
        title=notification.title,
        description=notification.description,
        status=notification.status,
        effective_status=effective_status_of(notification),
        priority=PriorityRead(
            base=priority.base,
            modifiers=PriorityModifiersSchema(
                action_required=priority.modifiers.action_required,
                time_constraint=priority.modifiers.time_constraint,
                amount=priority.modifiers.amount,
                role=priority.modifiers.role,
            ),
            calculated_priority=priority.calculated_priority,
        ),
        display_location=notification.display_location,
        metadata=NotificationMetadataRead(
            gradient=metadata.gradient,
            action_required=metadata.action_required,
            dismissible=metadata.dismissible,
            visibility=metadata.visibility,
            expires_at=metadata.expires_at,
            related_entity_id=metadata.related_entity_id,
            related_entity_type=metadata.related_entity_type,
            counterparty_id=metadata.counterparty_id,
            role=metadata.role,
            parent_notification_id=metadata.parent_notification_id,
            payment_data=(
                PaymentDataSchema(
                    amount=payment.amount,
                    currency=payment.currency,
                    type=payment.type,
                    status=payment.status,
                )
                if payment
                else None
            ),
        ),
        created_at=notification.created_at,
        updated_at=notification.updated_at,
    )


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(get_db),
) -> NotificationRead:
    """Create a notification for ``user_id`` and, when applicable, its counterparty."""

    modifiers = notification_in.priority.modifiers
    metadata = notification_in.metadata
    payment = metadata.payment_data
    try:
        notification = create_notification_uc(
            db,
            user_id=notification_in.user_id,
            type=notification_in.type,
            title=notification_in.title,
            description=notification_in.description,
            priority_base=notification_in.priority.base,
            modifiers=PriorityModifiers(
                action_required=modifiers.action_required,
                time_constraint=modifiers.time_constraint,
                amount=modifiers.amount,
                role=modifiers.role,
            ),
            display_location=notification_in.display_location,
            metadata=NotificationMetadata(
                gradient=metadata.gradient,
                action_required=metadata.action_required,
                dismissible=metadata.dismissible,
                visibility=metadata.visibility,
                expires_at=metadata.expires_at,
                related_entity_id=metadata.related_entity_id,
                related_entity_type=metadata.related_entity_type,
                counterparty_id=metadata.counterparty_id,
                role=metadata.role,
                payment_data=(
                    PaymentData(
                        amount=payment.amount,
                        currency=payment.currency,
                        type=payment.type,
                        status=payment.status,
                    )
                    if payment
                    else None
                ),
            ),
        )
    except NotificationError as exc:
        _raise_http(exc)
    return _notification_to_schema(notification)


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    status_filter: str | None = Query(default=None, alias="status"),
    limit: int | None = Query(default=None, gt=0, le=200),
    db: Session = Depends(get_db),
    viewer_id: str = Depends(get_viewer_id),
) -> list[NotificationRead]:
    """Return the viewer's notifications ordered by priority."""

    try:
        notifications = list_notifications_uc(
            db, viewer_id=viewer_id, status=status_filter, limit=limit
        )
    except NotificationError as exc:
        _raise_http(exc)
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/suggested-actions", response_model=list[NotificationRead])
def list_suggested_actions(
    db: Session = Depends(get_db),
    viewer_id: str = Depends(get_viewer_id),
) -> list[NotificationRead]:
    """Return the active notifications shown in the suggested actions panel."""

    notifications = get_suggested_actions_uc(db, viewer_id=viewer_id)
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/count", response_model=NotificationCountRead)
def count_notifications(
    db: Session = Depends(get_db),
    viewer_id: str = Depends(get_viewer_id),
) -> NotificationCountRead:
    return NotificationCountRead(
        active=count_active_notifications_uc(db, viewer_id=viewer_id)
    )


@router.post("/read", response_model=NotificationMarkReadResponse)
def mark_notifications_as_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    viewer_id: str = Depends(get_viewer_id),
) -> NotificationMarkReadResponse:
    """Dismiss a batch of notifications owned by the viewer."""

    dismissed = mark_notifications_as_read_uc(
        db, notification_ids=payload.unique_ids(), viewer_id=viewer_id
    )
    return NotificationMarkReadResponse(dismissed_ids=dismissed)


@router.post("/expire-sweep", response_model=ExpireSweepResponse)
def run_expire_sweep(db: Session = Depends(get_db)) -> ExpireSweepResponse:
    """Persist the expiry of every active notification past its deadline."""

    return ExpireSweepResponse(expired=expire_notifications_uc(db))


@router.delete("/", response_model=CleanupResponse)
def cleanup_notifications(
    older_than: datetime = Query(...),
    db: Session = Depends(get_db),
    viewer_id: str = Depends(get_viewer_id),
) -> CleanupResponse:
    """Delete the viewer's closed notifications created before ``older_than``."""

    deleted = cleanup_old_notifications_uc(db, user_id=viewer_id, older_than=older_than)
    return CleanupResponse(deleted=deleted)


@router.get("/{notification_id}", response_model=NotificationRead)
def get_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    viewer_id: str = Depends(get_viewer_id),
) -> NotificationRead:
    try:
        notification = get_notification_uc(
            db, notification_id=notification_id, viewer_id=viewer_id
        )
    except NotificationError as exc:
        _raise_http(exc)
    return _notification_to_schema(notification)


def _change_status(
    db: Session,
    *,
    notification_id: str,
    requested_status: str,
    viewer_id: str,
    payload: NotificationStatusUpdate | None,
) -> NotificationRead:
    try:
        notification = update_notification_status_uc(
            db,
            notification_id=notification_id,
            status=requested_status,
            viewer_id=viewer_id,
            payment_status=payload.payment_status if payload else None,
        )
    except NotificationError as exc:
        _raise_http(exc)
    return _notification_to_schema(notification)


@router.post("/{notification_id}/dismiss", response_model=NotificationRead)
def dismiss_notification(
    notification_id: str,
    payload: NotificationStatusUpdate | None = None,
    db: Session = Depends(get_db),
    viewer_id: str = Depends(get_viewer_id),
) -> NotificationRead:
    return _change_status(
        db,
        notification_id=notification_id,
        requested_status=STATUS_DISMISSED,
        viewer_id=viewer_id,
        payload=payload,
    )


@router.post("/{notification_id}/action", response_model=NotificationRead)
def action_notification(
    notification_id: str,
    payload: NotificationStatusUpdate | None = None,
    db: Session = Depends(get_db),
    viewer_id: str = Depends(get_viewer_id),
) -> NotificationRead:
    return _change_status(
        db,
        notification_id=notification_id,
        requested_status=STATUS_ACTIONED,
        viewer_id=viewer_id,
        payload=payload,
    )


@router.post("/{notification_id}/expire", response_model=NotificationRead)
def expire_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    viewer_id: str = Depends(get_viewer_id),
) -> NotificationRead:
    return _change_status(
        db,
        notification_id=notification_id,
        requested_status=STATUS_EXPIRED,
        viewer_id=viewer_id,
        payload=None,
    )


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams toast notifications to the viewer."""

    user_id = (websocket.query_params.get("user_id") or "").strip()
    if not user_id:
        await websocket.close(code=1008)
        return

    await notification_manager.connect(user_id, websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        logger.debug("Websocket closed for user %s", user_id)
    finally:
        notification_manager.disconnect(user_id, websocket)
