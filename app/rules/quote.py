"""Quote calculator.

Prices a booking candidate against a ``RateCatalog``. The calculator does
arithmetic only: it does not validate the candidate, and for odd but
well-formed input it degrades to zero subtotals instead of raising.
"""

from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional

from app.core.logging_config import get_logger
from app.models.enums import MealFormat, PackageCategory, PaymentPlan
from app.rules.catalog import ZERO, Price, RateCatalog
from app.rules.selection import BookingCandidate

logger = get_logger()

HALF = Decimal("0.5")


@dataclass(frozen=True)
class Quote:
    venue: Price
    decor: Price
    av: Price
    catering: Price
    pre_opening_rate: bool
    plan_amounts: Mapping[PaymentPlan, Price]
    meal_format: Optional[MealFormat] = None

    @property
    def grand_total(self) -> Price:
        return self.venue + self.decor + self.av + self.catering

    def amount_due(self, plan: PaymentPlan) -> Price:
        return self.plan_amounts[PaymentPlan(plan)]

    def to_dict(self) -> dict:
        return {
            "venue": self.venue.to_dict(),
            "decor": self.decor.to_dict(),
            "av": self.av.to_dict(),
            "catering": self.catering.to_dict(),
            "grand_total": self.grand_total.to_dict(),
            "pre_opening_rate": self.pre_opening_rate,
            "meal_format": self.meal_format.value if self.meal_format else None,
            "payment_plans": {plan.value: amount.to_dict() for plan, amount in self.plan_amounts.items()},
        }


def _plan_amounts(venue: Price, grand_total: Price) -> Mapping[PaymentPlan, Price]:
    return MappingProxyType({
        PaymentPlan.VENUE_ONLY_DEPOSIT: venue.rounded(),
        PaymentPlan.HALF_DEPOSIT: (grand_total * HALF).rounded(),
        PaymentPlan.FULL_PAYMENT: grand_total.rounded(),
    })


def compute_quote(candidate: BookingCandidate, catalog: RateCatalog) -> Quote:
    selection = candidate.selection
    event_type = candidate.event_type

    # Whole venue is one entry, never the sum of its parts
    venue = sum(
        (catalog.space_price(space, candidate.event_date) for space in candidate.normalized_spaces()),
        ZERO,
    )
    if selection.bring_own_vendor:
        venue = venue + catalog.own_vendor_fee
        decor = ZERO
        av = ZERO
    else:
        decor = catalog.price_for(PackageCategory.DECOR, selection.decor_package, event_type)
        av = catalog.price_for(PackageCategory.AV, selection.av_package, event_type)

    guests = candidate.guest_count if isinstance(candidate.guest_count, int) else 0
    meal_format = None
    if selection.catering_package:
        meal_format = catalog.resolve_meal_format(event_type, selection.meal_format)
    per_guest = catalog.price_for(
        PackageCategory.CATERING, selection.catering_package, event_type, meal_format
    )
    catering = per_guest * max(guests, 0)

    grand_total = venue + decor + av + catering
    quote = Quote(
        venue=venue,
        decor=decor,
        av=av,
        catering=catering,
        pre_opening_rate=catalog.is_pre_opening(candidate.event_date),
        plan_amounts=_plan_amounts(venue, grand_total),
        meal_format=meal_format,
    )

    logger.bind(log_type="pricing").info(
        f"Quote | event_type={getattr(event_type, 'value', event_type)} date={candidate.event_date} "
        f"total_mvr={grand_total.mvr} total_usd={grand_total.usd}"
    )
    return quote
