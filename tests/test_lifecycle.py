import pytest

from app.models.enums import BookingStatus
from app.rules.errors import ErrorCode, InvalidStatusTransitionError
from app.rules.lifecycle import can_transition, transition


@pytest.mark.parametrize("current,target", [
    (BookingStatus.PENDING, BookingStatus.APPROVED),
    (BookingStatus.PENDING, BookingStatus.REJECTED),
    (BookingStatus.APPROVED, BookingStatus.CONFIRMED),
    (BookingStatus.APPROVED, BookingStatus.CANCELLED),
    (BookingStatus.CONFIRMED, BookingStatus.COMPLETED),
])
def test_allowed_transitions(current, target):
    assert can_transition(current, target)
    assert transition(current, target) is target


@pytest.mark.parametrize("current,target", [
    (BookingStatus.PENDING, BookingStatus.CONFIRMED),
    (BookingStatus.REJECTED, BookingStatus.APPROVED),
    (BookingStatus.COMPLETED, BookingStatus.CANCELLED),
    (BookingStatus.CANCELLED, BookingStatus.APPROVED),
])
def test_disallowed_transitions_raise(current, target):
    with pytest.raises(InvalidStatusTransitionError) as exc:
        transition(current, target)
    assert exc.value.code is ErrorCode.INVALID_STATUS_TRANSITION


def test_transition_accepts_plain_values():
    assert transition("pending", "approved") is BookingStatus.APPROVED
