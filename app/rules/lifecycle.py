from app.models.enums import BookingStatus
from app.rules.errors import InvalidStatusTransitionError

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: frozenset({BookingStatus.APPROVED, BookingStatus.REJECTED}),
    BookingStatus.APPROVED: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED}),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return BookingStatus(target) in ALLOWED_TRANSITIONS[BookingStatus(current)]


def transition(current: BookingStatus, target: BookingStatus) -> BookingStatus:
    """Return ``target`` if the booking may move there from ``current``."""
    current, target = BookingStatus(current), BookingStatus(target)
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(current, target)
    return target
