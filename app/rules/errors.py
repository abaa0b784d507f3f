"""Domain error codes for the booking rules engine."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SELECTION_INVALID = "SELECTION_INVALID"
    DATE_UNAVAILABLE = "DATE_UNAVAILABLE"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class SelectionInvalidError(DomainError):
    """Raised when a booking candidate breaks one or more selection rules."""

    def __init__(self, violations) -> None:
        super().__init__(
            code=ErrorCode.SELECTION_INVALID,
            message="Booking request has invalid selections",
        )
        self.violations = tuple(violations)

    def field_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        for violation in self.violations:
            errors.setdefault(violation.field, violation.message)
        return errors


class AvailabilityConflictError(DomainError):
    """Raised when the requested date is already reserved for a space."""

    def __init__(self, event_date: date, spaces) -> None:
        super().__init__(
            code=ErrorCode.DATE_UNAVAILABLE,
            message="The selected date is unavailable for the chosen space",
        )
        self.event_date = event_date
        self.spaces = tuple(spaces)


class InvalidStatusTransitionError(DomainError):
    """Raised when a booking status change is not allowed."""

    def __init__(self, current, target) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS_TRANSITION,
            message=f"Cannot move a {current.value} booking to {target.value}",
        )
        self.current = current
        self.target = target


class BookingPersistenceError(DomainError):
    """Raised when the booking store rejects a write. Safe to retry."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PERSISTENCE_FAILED,
            message="Booking could not be saved, please try again",
        )


class BookingNotFoundError(DomainError):
    """Raised when a booking id does not exist."""

    def __init__(self, booking_id: int) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id
