"""Rate catalog: immutable price tables for spaces and service packages.

A ``RateCatalog`` is built once and passed to the validator, the quote
calculator and the HTTP layer. Lookups never raise: an unknown space or
package resolves to a zero price and the miss is logged on the pricing
channel, since it means the offered lists and the tables disagree.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Mapping, Optional

from app.core import config
from app.core.logging_config import get_logger
from app.models.enums import EventType, MealFormat, PackageCategory, SpaceId
from app.rules import rate_tables

logger = get_logger()

_UNIT = Decimal("1")

DEFAULT_MEAL_FORMAT = MealFormat.FULL_DINNER


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _coerce(enum_cls, value):
    """Return ``value`` as a member of ``enum_cls`` or None when it is not one."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class Price:
    """An amount in each of the two venue currencies."""

    mvr: Decimal = Decimal("0")
    usd: Decimal = Decimal("0")

    @classmethod
    def of(cls, mvr, usd) -> "Price":
        return cls(mvr=_to_decimal(mvr), usd=_to_decimal(usd))

    def __add__(self, other: "Price") -> "Price":
        if not isinstance(other, Price):
            return NotImplemented
        return Price(self.mvr + other.mvr, self.usd + other.usd)

    def __sub__(self, other: "Price") -> "Price":
        if not isinstance(other, Price):
            return NotImplemented
        return Price(self.mvr - other.mvr, self.usd - other.usd)

    def __mul__(self, factor) -> "Price":
        factor = _to_decimal(factor)
        return Price(self.mvr * factor, self.usd * factor)

    __rmul__ = __mul__

    def rounded(self) -> "Price":
        """Round each currency to whole units on its own."""
        return Price(
            self.mvr.quantize(_UNIT, rounding=ROUND_HALF_UP),
            self.usd.quantize(_UNIT, rounding=ROUND_HALF_UP),
        )

    @property
    def is_zero(self) -> bool:
        return self.mvr == 0 and self.usd == 0

    def to_dict(self) -> dict:
        return {"mvr": float(self.mvr), "usd": float(self.usd)}


ZERO = Price()


@dataclass(frozen=True)
class VenueSpace:
    id: SpaceId
    name: str
    description: str
    seating_capacity: int
    max_capacity: int
    pre_opening_price: Price
    regular_price: Price
    available_from: Optional[date] = None

    def is_live_on(self, event_date: Optional[date]) -> bool:
        if self.available_from is None or event_date is None:
            return True
        return event_date >= self.available_from


@dataclass(frozen=True)
class PackageRate:
    package_id: str
    category: PackageCategory
    event_type: EventType
    name: str
    description: str
    price: Price
    meal_format: Optional[MealFormat] = None
    includes: tuple = ()

    @property
    def per_guest(self) -> bool:
        return self.category is PackageCategory.CATERING


@dataclass(frozen=True)
class RateCatalog:
    spaces: Mapping[SpaceId, VenueSpace]
    packages: Mapping[tuple, PackageRate]
    rate_era_cutoff: date
    own_vendor_fee: Price
    _meal_formats: Mapping[EventType, tuple] = field(default_factory=dict, repr=False)

    # ---------------- SPACES ----------------
    def is_pre_opening(self, event_date: Optional[date]) -> bool:
        return event_date is None or event_date < self.rate_era_cutoff

    def offered_spaces(self, event_date: Optional[date] = None) -> list[VenueSpace]:
        return [s for s in self.spaces.values() if s.is_live_on(event_date)]

    def is_offered(self, space_id, event_date: Optional[date]) -> bool:
        space = self.spaces.get(_coerce(SpaceId, space_id))
        return space is not None and space.is_live_on(event_date)

    def space_price(self, space_id, event_date: Optional[date]) -> Price:
        space = self.spaces.get(_coerce(SpaceId, space_id))
        if space is None:
            logger.bind(log_type="pricing").warning(f"Rate lookup miss | space={space_id}")
            return ZERO

        if not space.is_live_on(event_date):
            logger.bind(log_type="pricing").warning(
                f"Rate lookup miss | space={space.id.value} not live on {event_date}"
            )
            return ZERO

        if self.is_pre_opening(event_date):
            return space.pre_opening_price
        return space.regular_price

    # ---------------- PACKAGES ----------------
    def resolve_meal_format(self, event_type, meal_format=None) -> Optional[MealFormat]:
        """Meal format a catering package is priced under.

        A missing format falls back to full dinner, or to the first format
        offered for the event type when full dinner is not (ramadan).
        """
        if meal_format:
            return _coerce(MealFormat, meal_format)
        offered = self.meal_formats(event_type)
        if DEFAULT_MEAL_FORMAT in offered or not offered:
            return DEFAULT_MEAL_FORMAT
        return offered[0]

    def _key(self, category, package_id, event_type, meal_format):
        category = _coerce(PackageCategory, category)
        if category is PackageCategory.CATERING:
            meal_format = self.resolve_meal_format(event_type, meal_format)
        else:
            meal_format = None
        return (_coerce(EventType, event_type), category, package_id, meal_format)

    def lookup(self, category, package_id, event_type, meal_format=None) -> Optional[PackageRate]:
        if not package_id:
            return None
        return self.packages.get(self._key(category, package_id, event_type, meal_format))

    def price_for(self, category, package_id, event_type, meal_format=None) -> Price:
        """Flat price of a package, or per-guest price for catering.

        Returns ``ZERO`` when nothing is selected or the id is unknown for the
        event type.
        """
        if not package_id:
            return ZERO

        rate = self.lookup(category, package_id, event_type, meal_format)
        if rate is None:
            logger.bind(log_type="pricing").warning(
                f"Rate lookup miss | category={getattr(category, 'value', category)} "
                f"package={package_id} event_type={getattr(event_type, 'value', event_type)} "
                f"meal_format={getattr(meal_format, 'value', meal_format)}"
            )
            return ZERO
        return rate.price

    def packages_for(self, category, event_type, meal_format=None) -> list[PackageRate]:
        category = _coerce(PackageCategory, category)
        event_type = _coerce(EventType, event_type)
        meal_format = _coerce(MealFormat, meal_format)
        return [
            rate for rate in self.packages.values()
            if rate.category is category
            and rate.event_type is event_type
            and (meal_format is None or rate.meal_format is meal_format)
        ]

    def meal_formats(self, event_type) -> list[MealFormat]:
        return list(self._meal_formats.get(_coerce(EventType, event_type), ()))


def build_catalog(spaces, package_rows, *, rate_era_cutoff: date, own_vendor_fee,
                  go_live: Optional[Mapping[SpaceId, date]] = None) -> RateCatalog:
    """Assemble a catalog from plain table rows (see ``rate_tables``)."""
    go_live = go_live or {}

    space_map = {}
    for space_id, name, description, seating, max_cap, pre, regular in spaces:
        space_map[space_id] = VenueSpace(
            id=space_id,
            name=name,
            description=description,
            seating_capacity=seating,
            max_capacity=max_cap,
            pre_opening_price=Price.of(*pre),
            regular_price=Price.of(*regular),
            available_from=go_live.get(space_id),
        )

    packages = {}
    meal_formats: dict[EventType, list] = {}
    for event_type, category, meal_format, row in package_rows:
        package_id, name, description, amounts, includes = row
        rate = PackageRate(
            package_id=package_id,
            category=category,
            event_type=event_type,
            name=name,
            description=description,
            price=Price.of(*amounts),
            meal_format=meal_format,
            includes=tuple(includes),
        )
        packages[(event_type, category, package_id, meal_format)] = rate
        if meal_format is not None:
            formats = meal_formats.setdefault(event_type, [])
            if meal_format not in formats:
                formats.append(meal_format)

    return RateCatalog(
        spaces=MappingProxyType(space_map),
        packages=MappingProxyType(packages),
        rate_era_cutoff=rate_era_cutoff,
        own_vendor_fee=Price.of(*own_vendor_fee),
        _meal_formats=MappingProxyType({k: tuple(v) for k, v in meal_formats.items()}),
    )


def build_default_catalog(rate_era_cutoff: Optional[date] = None,
                          garden_go_live: Optional[date] = None) -> RateCatalog:
    return build_catalog(
        rate_tables.SPACES,
        rate_tables.package_rows(),
        rate_era_cutoff=rate_era_cutoff or config.RATE_ERA_CUTOFF,
        own_vendor_fee=rate_tables.OWN_VENDOR_FEE,
        go_live={SpaceId.GARDEN_ANNEX: garden_go_live or config.GARDEN_ANNEX_GO_LIVE},
    )
