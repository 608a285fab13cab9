import pytest

from linkvault.exceptions import InvalidTransitionError
from linkvault.lifecycle import ItemStatus, can_transition, ensure_transition

PENDING = ItemStatus.PENDING
PROCESSING = ItemStatus.PROCESSING
COMPLETED = ItemStatus.COMPLETED
FAILED = ItemStatus.FAILED


@pytest.mark.parametrize(
    "current, target",
    [
        (PENDING, PROCESSING),
        (PENDING, COMPLETED),
        (PENDING, FAILED),
        (PROCESSING, COMPLETED),
        (PROCESSING, FAILED),
    ],
)
def test_forward_transitions_are_allowed(current, target):
    assert can_transition(current, target)
    ensure_transition(current, target)


@pytest.mark.parametrize(
    "current, target",
    [
        (PROCESSING, PENDING),
        (COMPLETED, FAILED),
        (COMPLETED, PENDING),
        (FAILED, COMPLETED),
        (FAILED, PROCESSING),
        (COMPLETED, COMPLETED),
    ],
)
def test_backward_and_terminal_transitions_are_rejected(current, target):
    assert not can_transition(current, target)
    with pytest.raises(InvalidTransitionError):
        ensure_transition(current, target)


def test_terminal_states():
    assert COMPLETED.is_terminal
    assert FAILED.is_terminal
    assert not PENDING.is_terminal
    assert not PROCESSING.is_terminal
