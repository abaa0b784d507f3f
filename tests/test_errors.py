from datetime import date

from app.models.enums import BookingStatus, SpaceId
from app.rules.errors import (
    AvailabilityConflictError,
    BookingNotFoundError,
    InvalidStatusTransitionError,
    SelectionInvalidError,
)
from app.rules.validator import Violation, ViolationCode
from app.utils.errors import domain_http_error


def test_selection_errors_keep_first_message_per_field():
    error = SelectionInvalidError([
        Violation(ViolationCode.NO_SPACE_SELECTED, "spaces", "Pick a space"),
        Violation(ViolationCode.WHOLE_VENUE_COMBINED, "spaces", "Second message"),
        Violation(ViolationCode.EVENT_DATE_REQUIRED, "event_date", "Pick a date"),
    ])
    exc = domain_http_error(error)

    assert exc.status_code == 422
    assert exc.detail["field_errors"] == {"spaces": "Pick a space", "event_date": "Pick a date"}


def test_status_codes_for_domain_errors():
    conflict = AvailabilityConflictError(date(2026, 5, 1), [SpaceId.WHOLE_VENUE])
    transition = InvalidStatusTransitionError(BookingStatus.PENDING, BookingStatus.COMPLETED)

    assert domain_http_error(conflict).status_code == 409
    assert domain_http_error(transition).status_code == 409
    assert domain_http_error(BookingNotFoundError(3)).status_code == 404
    assert transition.message == "Cannot move a pending booking to completed"
    assert str(BookingNotFoundError(3)) == "BOOKING_NOT_FOUND: Booking not found"
