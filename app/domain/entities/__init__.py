"""Domain entities exposed by the application."""

from .notification import (
    DISPLAY_BOTH,
    DISPLAY_LOCATIONS,
    DISPLAY_SUGGESTED_ACTIONS,
    DISPLAY_TOAST,
    NOTIFICATION_STATUSES,
    NOTIFICATION_TYPES,
    PAYMENT_STATUS_EXPIRED,
    PAYMENT_STATUS_PENDING,
    PAYMENT_STATUSES,
    PAYMENT_TYPES,
    PRIORITY_BASES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    ROLE_RECIPIENT,
    ROLE_SENDER,
    ROLES,
    STATUS_ACTIONED,
    STATUS_ACTIVE,
    STATUS_DISMISSED,
    STATUS_EXPIRED,
    TERMINAL_STATUSES,
    VISIBILITY_BOTH,
    VISIBILITY_RECIPIENT_ONLY,
    VISIBILITY_SENDER_ONLY,
    VISIBILITY_VALUES,
    Notification,
    NotificationMetadata,
    NotificationPriority,
    PaymentData,
    PriorityModifiers,
    opposite_role,
)

__all__ = [
    "Notification",
    "NotificationMetadata",
    "NotificationPriority",
    "PaymentData",
    "PriorityModifiers",
    "opposite_role",
    "DISPLAY_BOTH",
    "DISPLAY_LOCATIONS",
    "DISPLAY_SUGGESTED_ACTIONS",
    "DISPLAY_TOAST",
    "NOTIFICATION_STATUSES",
    "NOTIFICATION_TYPES",
    "PAYMENT_STATUS_EXPIRED",
    "PAYMENT_STATUS_PENDING",
    "PAYMENT_STATUSES",
    "PAYMENT_TYPES",
    "PRIORITY_BASES",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "ROLE_RECIPIENT",
    "ROLE_SENDER",
    "ROLES",
    "STATUS_ACTIONED",
    "STATUS_ACTIVE",
    "STATUS_DISMISSED",
    "STATUS_EXPIRED",
    "TERMINAL_STATUSES",
    "VISIBILITY_BOTH",
    "VISIBILITY_RECIPIENT_ONLY",
    "VISIBILITY_SENDER_ONLY",
    "VISIBILITY_VALUES",
]
