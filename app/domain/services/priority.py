"""Priority scoring for notifications.

A notification's score starts from the weight of its base tier and gains a
fixed bonus for every situational modifier that applies. The result is
clamped to ``MAX_PRIORITY`` so that it can be used directly for sorting.
"""

from __future__ import annotations

from decimal import Decimal
from numbers import Real
from types import MappingProxyType
from typing import Final, Mapping

from app.domain.entities import (
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    ROLE_RECIPIENT,
    ROLES,
    PriorityModifiers,
)
from app.domain.errors import InvalidArgumentError

BASE_WEIGHTS: Final[Mapping[str, int]] = MappingProxyType(
    {
        PRIORITY_HIGH: 70,
        PRIORITY_MEDIUM: 40,
        PRIORITY_LOW: 10,
    }
)

ACTION_REQUIRED_BONUS: Final[int] = 20
TIME_CONSTRAINT_BONUS: Final[int] = 15
LARGE_AMOUNT_BONUS: Final[int] = 10
RECIPIENT_ROLE_BONUS: Final[int] = 5

# Amounts are expressed in sats; the bonus requires strictly more than this.
LARGE_AMOUNT_THRESHOLD: Final[int] = 100_000
MAX_PRIORITY: Final[int] = 100


def compute_priority(base: str, modifiers: PriorityModifiers) -> int:
    """Return the bounded priority score for ``base`` adjusted by ``modifiers``.

    Raises :class:`InvalidArgumentError` when ``base`` is not a known tier or a
    modifier has the wrong type.
    """

    base_weight = _base_weight(base)
    _validate_modifiers(modifiers)

    score = base_weight
    if modifiers.action_required:
        score += ACTION_REQUIRED_BONUS
    if modifiers.time_constraint:
        score += TIME_CONSTRAINT_BONUS
    if modifiers.amount > LARGE_AMOUNT_THRESHOLD:
        score += LARGE_AMOUNT_BONUS
    if modifiers.role == ROLE_RECIPIENT:
        score += RECIPIENT_ROLE_BONUS
    return min(MAX_PRIORITY, score)


def _base_weight(base: str) -> int:
    try:
        return BASE_WEIGHTS[base]
    except (KeyError, TypeError) as exc:
        raise InvalidArgumentError(f"Unknown priority base: {base!r}") from exc


def _validate_modifiers(modifiers: PriorityModifiers) -> None:
    if not isinstance(modifiers, PriorityModifiers):
        raise InvalidArgumentError("Priority modifiers are required")
    if not isinstance(modifiers.action_required, bool):
        raise InvalidArgumentError("Modifier 'action_required' must be a boolean")
    if not isinstance(modifiers.time_constraint, bool):
        raise InvalidArgumentError("Modifier 'time_constraint' must be a boolean")
    amount = modifiers.amount
    if isinstance(amount, bool) or not isinstance(amount, (Real, Decimal)):
        raise InvalidArgumentError("Modifier 'amount' must be a number")
    if isinstance(amount, Decimal) and not amount.is_finite():
        raise InvalidArgumentError("Modifier 'amount' must be finite")
    if not isinstance(modifiers.role, str) or modifiers.role not in ROLES:
        raise InvalidArgumentError(f"Unknown modifier role: {modifiers.role!r}")


__all__ = [
    "ACTION_REQUIRED_BONUS",
    "BASE_WEIGHTS",
    "LARGE_AMOUNT_BONUS",
    "LARGE_AMOUNT_THRESHOLD",
    "MAX_PRIORITY",
    "RECIPIENT_ROLE_BONUS",
    "TIME_CONSTRAINT_BONUS",
    "compute_priority",
]
