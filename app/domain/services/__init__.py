"""Pure notification rules: scoring, visibility and lifecycle."""

from .lifecycle import (
    action,
    dismiss,
    effective_status,
    effective_status_of,
    expire,
    is_expired,
    transition,
    validate_transition,
)
from .priority import compute_priority
from .visibility import (
    RELATIONSHIP_UNRELATED,
    is_visible,
    is_visible_to,
    resolve_viewer_relationship,
)

__all__ = [
    "RELATIONSHIP_UNRELATED",
    "action",
    "compute_priority",
    "dismiss",
    "effective_status",
    "effective_status_of",
    "expire",
    "is_expired",
    "is_visible",
    "is_visible_to",
    "resolve_viewer_relationship",
    "transition",
    "validate_transition",
]
