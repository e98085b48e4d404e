"""Domain entity representing a wallet notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPE_TRANSACTION = "transaction"
NOTIFICATION_TYPE_PAYMENT_REQUEST = "payment_request"
NOTIFICATION_TYPE_SECURITY = "security"
NOTIFICATION_TYPE_SYSTEM = "system"
NOTIFICATION_TYPES = frozenset(
    {
        NOTIFICATION_TYPE_TRANSACTION,
        NOTIFICATION_TYPE_PAYMENT_REQUEST,
        NOTIFICATION_TYPE_SECURITY,
        NOTIFICATION_TYPE_SYSTEM,
    }
)

STATUS_ACTIVE = "active"
STATUS_DISMISSED = "dismissed"
STATUS_ACTIONED = "actioned"
STATUS_EXPIRED = "expired"
TERMINAL_STATUSES = frozenset({STATUS_DISMISSED, STATUS_ACTIONED, STATUS_EXPIRED})
NOTIFICATION_STATUSES = TERMINAL_STATUSES | {STATUS_ACTIVE}

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"
PRIORITY_BASES = frozenset({PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW})

ROLE_SENDER = "sender"
ROLE_RECIPIENT = "recipient"
ROLES = frozenset({ROLE_SENDER, ROLE_RECIPIENT})

VISIBILITY_SENDER_ONLY = "sender_only"
VISIBILITY_RECIPIENT_ONLY = "recipient_only"
VISIBILITY_BOTH = "both"
VISIBILITY_VALUES = frozenset(
    {VISIBILITY_SENDER_ONLY, VISIBILITY_RECIPIENT_ONLY, VISIBILITY_BOTH}
)

DISPLAY_SUGGESTED_ACTIONS = "suggested_actions"
DISPLAY_TOAST = "toast"
DISPLAY_BOTH = "both"
DISPLAY_LOCATIONS = frozenset({DISPLAY_SUGGESTED_ACTIONS, DISPLAY_TOAST, DISPLAY_BOTH})

PAYMENT_TYPES = frozenset({"lightning", "onchain"})
PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUS_EXPIRED = "expired"
PAYMENT_STATUSES = frozenset({PAYMENT_STATUS_PENDING, "completed", "failed", PAYMENT_STATUS_EXPIRED})


def opposite_role(role: str | None) -> str:
    """Return the role on the other side of a sender/recipient pair."""

    return ROLE_RECIPIENT if role == ROLE_SENDER else ROLE_SENDER


@dataclass(frozen=True)
class PriorityModifiers:
    """Situational factors that raise a notification's base priority."""

    action_required: bool
    time_constraint: bool
    amount: float
    role: str


@dataclass(frozen=True)
class NotificationPriority:
    """Priority tier, its modifiers and the score derived from both."""

    base: str
    modifiers: PriorityModifiers
    calculated_priority: int


@dataclass(frozen=True)
class PaymentData:
    """Payment details attached to transaction and payment request notifications."""

    amount: float
    currency: str
    type: str
    status: str


@dataclass(frozen=True)
class NotificationMetadata:
    """Display and routing information for a notification."""

    gradient: str
    action_required: bool
    dismissible: bool
    visibility: str
    expires_at: datetime | None = None
    related_entity_id: str | None = None
    related_entity_type: str | None = None
    counterparty_id: str | None = None
    role: str | None = None
    parent_notification_id: str | None = None
    payment_data: PaymentData | None = None


@dataclass(frozen=True)
class Notification:
    """Event a user should be informed about, ranked by priority."""

    id: str | None
    user_id: str
    type: str
    title: str
    description: str
    status: str
    priority: NotificationPriority
    display_location: str
    metadata: NotificationMetadata
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def shows_in_suggested_actions(self) -> bool:
        return self.display_location in (DISPLAY_SUGGESTED_ACTIONS, DISPLAY_BOTH)

    def shows_as_toast(self) -> bool:
        return self.display_location in (DISPLAY_TOAST, DISPLAY_BOTH)


__all__ = [
    "Notification",
    "NotificationMetadata",
    "NotificationPriority",
    "PaymentData",
    "PriorityModifiers",
    "opposite_role",
    "NOTIFICATION_TYPE_TRANSACTION",
    "NOTIFICATION_TYPE_PAYMENT_REQUEST",
    "NOTIFICATION_TYPE_SECURITY",
    "NOTIFICATION_TYPE_SYSTEM",
    "NOTIFICATION_TYPES",
    "STATUS_ACTIVE",
    "STATUS_DISMISSED",
    "STATUS_ACTIONED",
    "STATUS_EXPIRED",
    "TERMINAL_STATUSES",
    "NOTIFICATION_STATUSES",
    "PRIORITY_HIGH",
    "PRIORITY_MEDIUM",
    "PRIORITY_LOW",
    "PRIORITY_BASES",
    "ROLE_SENDER",
    "ROLE_RECIPIENT",
    "ROLES",
    "VISIBILITY_SENDER_ONLY",
    "VISIBILITY_RECIPIENT_ONLY",
    "VISIBILITY_BOTH",
    "VISIBILITY_VALUES",
    "DISPLAY_SUGGESTED_ACTIONS",
    "DISPLAY_TOAST",
    "DISPLAY_BOTH",
    "DISPLAY_LOCATIONS",
    "PAYMENT_TYPES",
    "PAYMENT_STATUS_PENDING",
    "PAYMENT_STATUS_EXPIRED",
    "PAYMENT_STATUSES",
]
