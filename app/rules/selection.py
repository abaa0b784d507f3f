"""In-progress booking state: the service selection and the booking candidate.

Both are immutable; every ``with_*`` helper returns a new object. The helpers
keep the selection invariants (bring-own-vendor excludes in-house decor and
AV, whole-venue excludes individual spaces). Objects built directly through
the constructor are not checked here; the validator reports what is wrong
with them.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from app.models.enums import EventType, MealFormat, PaymentPlan, SpaceId

INDIVIDUAL_SPACES = frozenset({
    SpaceId.PRIMARY_FLOOR,
    SpaceId.GARDEN_ANNEX,
    SpaceId.SECONDARY_FLOOR,
})

FLOOR_SPACES = frozenset({SpaceId.PRIMARY_FLOOR, SpaceId.SECONDARY_FLOOR})


@dataclass(frozen=True)
class ServiceSelection:
    decor_package: Optional[str] = None
    av_package: Optional[str] = None
    catering_package: Optional[str] = None
    meal_format: Optional[MealFormat] = None
    bring_own_vendor: bool = False

    def with_decor(self, package_id: Optional[str]) -> "ServiceSelection":
        if package_id is None:
            return replace(self, decor_package=None)
        return replace(self, decor_package=package_id, bring_own_vendor=False)

    def with_av(self, package_id: Optional[str]) -> "ServiceSelection":
        if package_id is None:
            return replace(self, av_package=None)
        return replace(self, av_package=package_id, bring_own_vendor=False)

    def with_catering(self, package_id: Optional[str],
                      meal_format: Optional[MealFormat] = None) -> "ServiceSelection":
        return replace(
            self,
            catering_package=package_id,
            meal_format=meal_format if package_id else None,
        )

    def with_bring_own_vendor(self, enabled: bool = True) -> "ServiceSelection":
        if not enabled:
            return replace(self, bring_own_vendor=False)
        return replace(self, bring_own_vendor=True, decor_package=None, av_package=None)

    @property
    def has_creative_service(self) -> bool:
        return bool(self.decor_package or self.av_package or self.bring_own_vendor)


@dataclass(frozen=True)
class ContactInfo:
    full_name: str = ""
    phone: str = ""
    email: str = ""
    company_name: Optional[str] = None


def normalize_spaces(spaces) -> tuple:
    """Collapse a space selection to what is priced and stored.

    Whole-venue wins over anything else; the three individual spaces
    together are the whole venue. Order of first selection is kept.
    """
    unique = tuple(dict.fromkeys(spaces))
    if SpaceId.WHOLE_VENUE in unique or INDIVIDUAL_SPACES.issubset(unique):
        return (SpaceId.WHOLE_VENUE,)
    return unique


@dataclass(frozen=True)
class BookingCandidate:
    event_type: Optional[EventType] = None
    event_date: Optional[date] = None
    spaces: tuple = ()
    guest_count: int = 0
    selection: ServiceSelection = field(default_factory=ServiceSelection)
    payment_plan: PaymentPlan = PaymentPlan.HALF_DEPOSIT
    contact: ContactInfo = field(default_factory=ContactInfo)
    notes: Optional[str] = None
    transfer_slip_url: Optional[str] = None

    def with_space(self, space: SpaceId) -> "BookingCandidate":
        if space == SpaceId.WHOLE_VENUE:
            return replace(self, spaces=(SpaceId.WHOLE_VENUE,))
        kept = tuple(s for s in self.spaces if s != SpaceId.WHOLE_VENUE and s != space)
        return replace(self, spaces=kept + (space,))

    def without_space(self, space: SpaceId) -> "BookingCandidate":
        kept = tuple(s for s in self.spaces if s != space)
        if not FLOOR_SPACES.intersection(kept):
            kept = tuple(s for s in kept if s != SpaceId.GARDEN_ANNEX)
        return replace(self, spaces=kept)

    def with_selection(self, selection: ServiceSelection) -> "BookingCandidate":
        return replace(self, selection=selection)

    def normalized_spaces(self) -> tuple:
        return normalize_spaces(self.spaces)
