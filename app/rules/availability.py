"""Date blocking for a space selection, computed from existing bookings.

Only bookings in a blocking status reserve a date. A whole-venue booking
blocks every space on its date, and a whole-venue request needs every space
free.
"""

from datetime import date
from typing import Iterable, NamedTuple

from app.models.enums import BookingStatus, SpaceId
from app.rules.selection import normalize_spaces

BLOCKING_STATUSES = frozenset({
    BookingStatus.APPROVED,
    BookingStatus.CONFIRMED,
    BookingStatus.COMPLETED,
})


class BookedSlot(NamedTuple):
    event_date: date
    space: SpaceId
    status: BookingStatus = BookingStatus.APPROVED


def _blocking_on(day: date, bookings: Iterable[BookedSlot]) -> list[BookedSlot]:
    return [b for b in bookings if b.event_date == day and b.status in BLOCKING_STATUSES]


def is_blocked(day: date, space: SpaceId, bookings: Iterable[BookedSlot]) -> bool:
    same_day = _blocking_on(day, bookings)

    if any(b.space == SpaceId.WHOLE_VENUE for b in same_day):
        return True

    if space == SpaceId.WHOLE_VENUE:
        return bool(same_day)

    return any(b.space == space for b in same_day)


def is_selection_blocked(day: date, spaces, bookings: Iterable[BookedSlot]) -> bool:
    """A multi-space selection is blocked when any of its spaces is."""
    bookings = list(bookings)
    return any(is_blocked(day, space, bookings) for space in normalize_spaces(spaces))


def blocked_spaces(day: date, spaces, bookings: Iterable[BookedSlot]) -> list[SpaceId]:
    bookings = list(bookings)
    return [s for s in normalize_spaces(spaces) if is_blocked(day, s, bookings)]


def blocked_dates(spaces, bookings: Iterable[BookedSlot]) -> list[date]:
    """Every date on which the selection cannot be booked, ascending."""
    bookings = [b for b in bookings if b.status in BLOCKING_STATUSES]
    days = sorted({b.event_date for b in bookings})
    return [d for d in days if is_selection_blocked(d, spaces, bookings)]


def whole_venue_dates(bookings: Iterable[BookedSlot]) -> list[date]:
    return sorted({
        b.event_date for b in bookings
        if b.space == SpaceId.WHOLE_VENUE and b.status in BLOCKING_STATUSES
    })
