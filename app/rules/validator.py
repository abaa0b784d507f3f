"""Selection rules for a booking candidate.

The validator is pure: it never changes the candidate, it only reports
every rule that is broken. Each broken rule is a ``Violation`` tied to the
form field the user has to fix.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo

from app.core import config
from app.models.enums import SpaceId
from app.rules.catalog import RateCatalog
from app.rules.selection import FLOOR_SPACES, BookingCandidate


class ViolationCode(str, Enum):
    NO_SPACE_SELECTED = "no_space_selected"
    WHOLE_VENUE_COMBINED = "whole_venue_combined"
    GARDEN_ANNEX_WITHOUT_FLOOR = "garden_annex_without_floor"
    SPACE_NOT_OFFERED = "space_not_offered"
    DECOR_WITH_OWN_VENDOR = "decor_with_own_vendor"
    AV_WITH_OWN_VENDOR = "av_with_own_vendor"
    CREATIVE_SERVICE_REQUIRED = "creative_service_required"
    GUEST_COUNT_OUT_OF_RANGE = "guest_count_out_of_range"
    EVENT_DATE_REQUIRED = "event_date_required"
    EVENT_DATE_IN_PAST = "event_date_in_past"
    EVENT_TYPE_REQUIRED = "event_type_required"


@dataclass(frozen=True)
class Violation:
    code: ViolationCode
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    violations: tuple = ()

    @property
    def valid(self) -> bool:
        return not self.violations

    def codes(self) -> set:
        return {v.code for v in self.violations}


def venue_today(tz_name: str = config.VENUE_TIMEZONE) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()


class SelectionValidator:
    def __init__(self, catalog: RateCatalog, max_guests: int = config.MAX_GUEST_COUNT,
                 tz_name: str = config.VENUE_TIMEZONE) -> None:
        self._catalog = catalog
        self._max_guests = max_guests
        self._tz_name = tz_name

    def validate(self, candidate: BookingCandidate, today: Optional[date] = None) -> ValidationResult:
        today = today or venue_today(self._tz_name)
        violations: list[Violation] = []

        violations += self._check_spaces(candidate)
        violations += self._check_services(candidate)
        violations += self._check_event(candidate, today)

        return ValidationResult(tuple(violations))

    # ---------------- SPACES ----------------
    def _check_spaces(self, candidate: BookingCandidate) -> list[Violation]:
        spaces = set(candidate.spaces)
        found = []

        if not spaces:
            return [Violation(ViolationCode.NO_SPACE_SELECTED, "spaces",
                              "Please select at least one space")]

        if SpaceId.WHOLE_VENUE in spaces and len(spaces) > 1:
            found.append(Violation(
                ViolationCode.WHOLE_VENUE_COMBINED, "spaces",
                "The entire venue cannot be combined with individual spaces",
            ))

        if SpaceId.GARDEN_ANNEX in spaces and not FLOOR_SPACES.intersection(spaces):
            found.append(Violation(
                ViolationCode.GARDEN_ANNEX_WITHOUT_FLOOR, "spaces",
                "The outdoor garden can only be booked together with Floor 1 or Floor 2",
            ))

        for space in candidate.spaces:
            if not self._catalog.is_offered(space, candidate.event_date):
                found.append(Violation(
                    ViolationCode.SPACE_NOT_OFFERED, "spaces",
                    f"{getattr(space, 'value', space)} is not available on the selected date",
                ))

        return found

    # ---------------- SERVICES ----------------
    def _check_services(self, candidate: BookingCandidate) -> list[Violation]:
        selection = candidate.selection
        found = []

        if selection.bring_own_vendor and selection.decor_package:
            found.append(Violation(
                ViolationCode.DECOR_WITH_OWN_VENDOR, "decor_package",
                "In-house decor cannot be combined with bringing your own vendor",
            ))

        if selection.bring_own_vendor and selection.av_package:
            found.append(Violation(
                ViolationCode.AV_WITH_OWN_VENDOR, "av_package",
                "In-house audio visual cannot be combined with bringing your own vendor",
            ))

        # Catering alone does not count
        if candidate.spaces and not selection.has_creative_service:
            found.append(Violation(
                ViolationCode.CREATIVE_SERVICE_REQUIRED, "decor_package",
                "Choose a decor or audio visual package, or bring your own vendor",
            ))

        return found

    # ---------------- EVENT ----------------
    def _check_event(self, candidate: BookingCandidate, today: date) -> list[Violation]:
        found = []

        guests = candidate.guest_count
        if isinstance(guests, bool) or not isinstance(guests, int) or not 1 <= guests <= self._max_guests:
            found.append(Violation(
                ViolationCode.GUEST_COUNT_OUT_OF_RANGE, "guest_count",
                f"Guest count must be between 1 and {self._max_guests}",
            ))

        if candidate.event_type is None:
            found.append(Violation(ViolationCode.EVENT_TYPE_REQUIRED, "event_type",
                                   "Event type is required"))

        if candidate.event_date is None:
            found.append(Violation(ViolationCode.EVENT_DATE_REQUIRED, "event_date",
                                   "Event date is required"))
        elif candidate.event_date < today:
            found.append(Violation(ViolationCode.EVENT_DATE_IN_PAST, "event_date",
                                   "Event date cannot be in the past"))

        return found
