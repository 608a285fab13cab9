"""Lifecycle of a saved item.

An item starts as PENDING (queued in a bulk run) or PROCESSING (single
import, where creation and the extraction attempt are not separated) and
ends as COMPLETED or FAILED. Terminal states are final.
"""

from enum import Enum

from .exceptions import InvalidTransitionError


class ItemStatus(str, Enum):
    """Status of a saved item."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (ItemStatus.COMPLETED, ItemStatus.FAILED)


_ALLOWED = {
    ItemStatus.PENDING: {
        ItemStatus.PROCESSING,
        ItemStatus.COMPLETED,
        ItemStatus.FAILED,
    },
    ItemStatus.PROCESSING: {ItemStatus.COMPLETED, ItemStatus.FAILED},
    ItemStatus.COMPLETED: set(),
    ItemStatus.FAILED: set(),
}


def can_transition(current: ItemStatus, target: ItemStatus) -> bool:
    """Return True if an item in ``current`` may move to ``target``."""
    return target in _ALLOWED[current]


def ensure_transition(current: ItemStatus, target: ItemStatus) -> None:
    """Raise InvalidTransitionError unless ``current`` -> ``target`` is allowed."""
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot move item from {current.value} to {target.value}"
        )
