"""Errors raised by the notification domain."""


class NotificationError(ValueError):
    """Base class for rejected notification operations."""


class InvalidArgumentError(NotificationError):
    """An input falls outside its enumerated set or has the wrong shape."""


class InvalidTransitionError(NotificationError):
    """A status change is not allowed by the notification lifecycle."""


class NotificationNotFoundError(NotificationError):
    """The requested notification does not exist or is not visible."""


__all__ = [
    "NotificationError",
    "InvalidArgumentError",
    "InvalidTransitionError",
    "NotificationNotFoundError",
]
