"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, StrictBool

NotificationTypeLiteral = Literal["transaction", "payment_request", "security", "system"]
NotificationStatusLiteral = Literal["active", "dismissed", "actioned", "expired"]
PriorityBaseLiteral = Literal["high", "medium", "low"]
RoleLiteral = Literal["sender", "recipient"]
VisibilityLiteral = Literal["sender_only", "recipient_only", "both"]
DisplayLocationLiteral = Literal["suggested_actions", "toast", "both"]
PaymentStatusLiteral = Literal["pending", "completed", "failed", "expired"]


class PriorityModifiersSchema(BaseModel):
    """Situational modifiers applied on top of the priority tier."""

    action_required: StrictBool = False
    time_constraint: StrictBool = False
    amount: float = Field(default=0, description="Amount involved, in sats")
    role: RoleLiteral = "recipient"


class PriorityCreate(BaseModel):
    base: PriorityBaseLiteral
    modifiers: PriorityModifiersSchema = Field(default_factory=PriorityModifiersSchema)


class PriorityRead(PriorityCreate):
    calculated_priority: int


class PaymentDataSchema(BaseModel):
    amount: float
    currency: str = Field(default="sats", min_length=1)
    type: Literal["lightning", "onchain"]
    status: PaymentStatusLiteral = "pending"


class NotificationMetadataCreate(BaseModel):
    """Display and routing metadata supplied by the event producer."""

    gradient: str = ""
    action_required: StrictBool = False
    dismissible: StrictBool = True
    visibility: VisibilityLiteral = "both"
    expires_at: datetime | None = None
    related_entity_id: str | None = None
    related_entity_type: str | None = None
    counterparty_id: str | None = None
    role: RoleLiteral | None = None
    payment_data: PaymentDataSchema | None = None


class NotificationMetadataRead(NotificationMetadataCreate):
    parent_notification_id: str | None = None


class NotificationCreate(BaseModel):
    """Payload used to create a notification."""

    user_id: str = Field(..., min_length=1)
    type: NotificationTypeLiteral
    title: str = Field(..., min_length=1, max_length=120)
    description: str
    priority: PriorityCreate
    display_location: DisplayLocationLiteral = "suggested_actions"
    metadata: NotificationMetadataCreate = Field(default_factory=NotificationMetadataCreate)


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    type: str
    title: str
    description: str
    status: str
    effective_status: str
    priority: PriorityRead
    display_location: str
    metadata: NotificationMetadataRead
    created_at: datetime
    updated_at: datetime


class NotificationStatusUpdate(BaseModel):
    """Optional payment status recorded alongside a status change."""

    payment_status: PaymentStatusLiteral | None = None


class NotificationMarkReadRequest(BaseModel):
    """Payload used to dismiss a batch of notifications."""

    ids: list[str] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[str]:
        """Return the list of identifiers without duplicates preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationMarkReadResponse(BaseModel):
    dismissed_ids: list[str]


class NotificationCountRead(BaseModel):
    active: int


class ExpireSweepResponse(BaseModel):
    expired: int


class CleanupResponse(BaseModel):
    deleted: int


__all__ = [
    "CleanupResponse",
    "ExpireSweepResponse",
    "NotificationCountRead",
    "NotificationCreate",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationMetadataCreate",
    "NotificationMetadataRead",
    "NotificationRead",
    "NotificationStatusUpdate",
    "PaymentDataSchema",
    "PriorityCreate",
    "PriorityModifiersSchema",
    "PriorityRead",
]
