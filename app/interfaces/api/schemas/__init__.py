from .notification import (
    CleanupResponse,
    ExpireSweepResponse,
    NotificationCountRead,
    NotificationCreate,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationMetadataCreate,
    NotificationMetadataRead,
    NotificationRead,
    NotificationStatusUpdate,
    PaymentDataSchema,
    PriorityCreate,
    PriorityModifiersSchema,
    PriorityRead,
)

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
