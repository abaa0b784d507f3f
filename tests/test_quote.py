from datetime import date

import pytest

from app.models.enums import EventType, MealFormat, PaymentPlan, SpaceId
from app.rules.catalog import ZERO, Price, build_default_catalog
from app.rules.quote import compute_quote
from app.rules.selection import BookingCandidate, ServiceSelection

PRE_OPENING_DAY = date(2026, 12, 12)
REGULAR_DAY = date(2027, 2, 14)


@pytest.fixture
def fixed_catalog():
    return build_default_catalog(rate_era_cutoff=date(2027, 1, 1), garden_go_live=date(2026, 12, 1))


def test_pre_opening_wedding_quote(fixed_catalog):
    candidate = BookingCandidate(
        event_type=EventType.WEDDING,
        event_date=PRE_OPENING_DAY,
        spaces=(SpaceId.PRIMARY_FLOOR,),
        guest_count=80,
        selection=ServiceSelection().with_decor("classic").with_catering("silver", MealFormat.FULL_DINNER),
        payment_plan=PaymentPlan.HALF_DEPOSIT,
    )
    quote = compute_quote(candidate, fixed_catalog)

    assert quote.venue == Price.of(25000, 1620)
    assert quote.decor == Price.of(20000, 1300)
    assert quote.av == ZERO
    assert quote.catering == Price.of(267 * 80, 17 * 80)
    assert quote.grand_total == Price.of(66360, 4280)
    assert quote.pre_opening_rate
    assert quote.amount_due(PaymentPlan.HALF_DEPOSIT) == Price.of(33180, 2140)
    assert quote.amount_due(PaymentPlan.VENUE_ONLY_DEPOSIT) == Price.of(25000, 1620)
    assert quote.amount_due(PaymentPlan.FULL_PAYMENT) == Price.of(66360, 4280)


def test_own_vendor_fee_added_once_for_corporate(fixed_catalog):
    candidate = BookingCandidate(
        event_type=EventType.CORPORATE,
        event_date=PRE_OPENING_DAY,
        spaces=(SpaceId.PRIMARY_FLOOR, SpaceId.SECONDARY_FLOOR),
        guest_count=50,
        selection=ServiceSelection().with_bring_own_vendor(),
    )
    quote = compute_quote(candidate, fixed_catalog)

    assert quote.decor == ZERO
    assert quote.av == ZERO
    assert quote.venue == Price.of(25000 + 20000 + 5000, 1620 + 1300 + 325)
    # 3245 / 2 rounds half up
    assert quote.amount_due(PaymentPlan.HALF_DEPOSIT) == Price.of(25000, 1623)


def test_own_vendor_ignores_stray_package_ids(fixed_catalog):
    candidate = BookingCandidate(
        event_type=EventType.CORPORATE,
        event_date=REGULAR_DAY,
        spaces=(SpaceId.PRIMARY_FLOOR,),
        guest_count=50,
        selection=ServiceSelection(decor_package="premium", av_package="premium", bring_own_vendor=True),
    )
    quote = compute_quote(candidate, fixed_catalog)
    assert quote.decor == ZERO
    assert quote.av == ZERO


def test_whole_venue_priced_as_one_space(fixed_catalog):
    candidate = BookingCandidate(
        event_type=EventType.PRIVATE,
        event_date=REGULAR_DAY,
        spaces=(SpaceId.PRIMARY_FLOOR, SpaceId.GARDEN_ANNEX, SpaceId.SECONDARY_FLOOR),
        guest_count=300,
        selection=ServiceSelection().with_av("standard"),
    )
    quote = compute_quote(candidate, fixed_catalog)

    assert quote.venue == Price.of(70000, 4540)
    assert quote.av == Price.of(15000, 975)
    assert not quote.pre_opening_rate


def test_ramadan_iftar_catering(fixed_catalog):
    candidate = BookingCandidate(
        event_type=EventType.RAMADAN,
        event_date=REGULAR_DAY,
        spaces=(SpaceId.SECONDARY_FLOOR,),
        guest_count=100,
        selection=ServiceSelection().with_decor("classic").with_catering("gold", MealFormat.IFTAR),
    )
    quote = compute_quote(candidate, fixed_catalog)

    assert quote.decor == Price.of(5000, 325)
    assert quote.catering == Price.of(36000, 2300)


def test_unknown_package_contributes_zero(fixed_catalog):
    candidate = BookingCandidate(
        event_type=EventType.WEDDING,
        event_date=REGULAR_DAY,
        spaces=(SpaceId.PRIMARY_FLOOR,),
        guest_count=10,
        selection=ServiceSelection(decor_package="diamond"),
    )
    quote = compute_quote(candidate, fixed_catalog)
    assert quote.decor == ZERO
    assert quote.grand_total == Price.of(35000, 2270)


def test_empty_candidate_quotes_zero(fixed_catalog):
    quote = compute_quote(BookingCandidate(), fixed_catalog)
    assert quote.grand_total == ZERO
    assert all(amount == ZERO for amount in quote.plan_amounts.values())


def test_quote_to_dict_exposes_plans(fixed_catalog):
    candidate = BookingCandidate(
        event_type=EventType.OTHER,
        event_date=REGULAR_DAY,
        spaces=(SpaceId.SECONDARY_FLOOR,),
        guest_count=10,
        selection=ServiceSelection().with_av("premium"),
    )
    data = compute_quote(candidate, fixed_catalog).to_dict()

    assert data["av"] == {"mvr": 50000.0, "usd": 3245.0}
    assert data["grand_total"] == {"mvr": 80000.0, "usd": 5190.0}
    assert set(data["payment_plans"]) == {p.value for p in PaymentPlan}
    assert data["payment_plans"]["half_deposit"] == {"mvr": 40000.0, "usd": 2595.0}


def test_quote_records_meal_format_it_priced(fixed_catalog):
    candidate = BookingCandidate(
        event_type=EventType.RAMADAN,
        event_date=REGULAR_DAY,
        spaces=(SpaceId.SECONDARY_FLOOR,),
        guest_count=40,
        selection=ServiceSelection(decor_package="classic", catering_package="silver"),
    )
    quote = compute_quote(candidate, fixed_catalog)

    assert quote.meal_format is MealFormat.LIGHT_REFRESHMENTS
    assert quote.catering == Price.of(145 * 40, 9 * 40)
    assert quote.to_dict()["meal_format"] == "light_refreshments"


def test_no_catering_means_no_meal_format(fixed_catalog):
    candidate = BookingCandidate(
        event_type=EventType.WEDDING,
        event_date=REGULAR_DAY,
        spaces=(SpaceId.PRIMARY_FLOOR,),
        guest_count=40,
        selection=ServiceSelection(decor_package="classic", meal_format=MealFormat.FULL_DINNER),
    )
    assert compute_quote(candidate, fixed_catalog).meal_format is None
