from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.models.enums import EventType, MealFormat, PackageCategory, SpaceId
from app.rules.catalog import ZERO, Price, build_default_catalog


CUTOFF = date(2027, 1, 1)
GO_LIVE = date(2026, 12, 1)


@pytest.fixture
def fixed_catalog():
    return build_default_catalog(rate_era_cutoff=CUTOFF, garden_go_live=GO_LIVE)


def test_day_before_cutoff_uses_pre_opening_rate(fixed_catalog):
    price = fixed_catalog.space_price(SpaceId.PRIMARY_FLOOR, CUTOFF - timedelta(days=1))
    assert price == Price.of(25000, 1620)
    assert fixed_catalog.is_pre_opening(CUTOFF - timedelta(days=1))


def test_cutoff_day_uses_regular_rate(fixed_catalog):
    price = fixed_catalog.space_price(SpaceId.PRIMARY_FLOOR, CUTOFF)
    assert price == Price.of(35000, 2270)
    assert not fixed_catalog.is_pre_opening(CUTOFF)


def test_no_event_date_prices_at_pre_opening(fixed_catalog):
    assert fixed_catalog.space_price(SpaceId.WHOLE_VENUE, None) == Price.of(50000, 3240)


def test_garden_annex_hidden_before_go_live(fixed_catalog):
    before = [s.id for s in fixed_catalog.offered_spaces(GO_LIVE - timedelta(days=1))]
    on_day = [s.id for s in fixed_catalog.offered_spaces(GO_LIVE)]

    assert SpaceId.GARDEN_ANNEX not in before
    assert SpaceId.GARDEN_ANNEX in on_day
    assert fixed_catalog.space_price(SpaceId.GARDEN_ANNEX, GO_LIVE - timedelta(days=1)) == ZERO
    assert fixed_catalog.space_price(SpaceId.GARDEN_ANNEX, GO_LIVE) == Price.of(10000, 650)


def test_every_space_offered_without_a_date(fixed_catalog):
    assert len(fixed_catalog.offered_spaces()) == 4


def test_package_prices_depend_on_event_type(fixed_catalog):
    wedding = fixed_catalog.price_for(PackageCategory.DECOR, "classic", EventType.WEDDING)
    ramadan = fixed_catalog.price_for(PackageCategory.DECOR, "classic", EventType.RAMADAN)
    corporate_av = fixed_catalog.price_for(PackageCategory.AV, "premium", EventType.CORPORATE)

    assert wedding == Price.of(20000, 1300)
    assert ramadan == Price.of(5000, 325)
    assert corporate_av == Price.of(80000, 5190)


def test_catering_defaults_to_full_dinner(fixed_catalog):
    default = fixed_catalog.price_for(PackageCategory.CATERING, "silver", EventType.WEDDING)
    light = fixed_catalog.price_for(
        PackageCategory.CATERING, "silver", EventType.WEDDING, MealFormat.LIGHT_REFRESHMENTS
    )
    assert default == Price.of(267, 17)
    assert light == Price.of(145, 9)


def test_iftar_only_for_ramadan(fixed_catalog):
    assert fixed_catalog.meal_formats(EventType.RAMADAN) == [
        MealFormat.LIGHT_REFRESHMENTS, MealFormat.IFTAR,
    ]
    assert MealFormat.IFTAR not in fixed_catalog.meal_formats(EventType.WEDDING)
    assert fixed_catalog.price_for(
        PackageCategory.CATERING, "gold", EventType.WEDDING, MealFormat.IFTAR
    ) == ZERO


def test_lookup_miss_resolves_to_zero(fixed_catalog):
    assert fixed_catalog.price_for(PackageCategory.DECOR, "diamond", EventType.WEDDING) == ZERO
    assert fixed_catalog.price_for(PackageCategory.AV, None, EventType.WEDDING) == ZERO
    assert fixed_catalog.space_price("rooftop", date(2027, 3, 1)) == ZERO


def test_packages_for_lists_one_tier_each(fixed_catalog):
    decor = fixed_catalog.packages_for(PackageCategory.DECOR, EventType.PRIVATE)
    assert [p.package_id for p in decor] == ["classic", "standard", "premium"]
    assert not any(p.per_guest for p in decor)

    catering = fixed_catalog.packages_for(
        PackageCategory.CATERING, EventType.CORPORATE, MealFormat.FULL_DINNER
    )
    assert [p.package_id for p in catering] == ["silver", "gold", "platinum"]
    assert all(p.per_guest for p in catering)


def test_catalog_tables_are_read_only(fixed_catalog):
    with pytest.raises(TypeError):
        fixed_catalog.spaces[SpaceId.PRIMARY_FLOOR] = None


def test_price_rounding_is_half_up_per_currency():
    price = Price.of("1622.5", "0.5").rounded()
    assert price.mvr == Decimal("1623")
    assert price.usd == Decimal("1")


@pytest.mark.parametrize("event_type,standard,premium", [
    (EventType.WEDDING, (10000, 650), (25000, 1620)),
    (EventType.PRIVATE, (15000, 975), (25000, 1620)),
    (EventType.RAMADAN, (15000, 975), (25000, 1620)),
    (EventType.OTHER, (15000, 975), (50000, 3245)),
    (EventType.CORPORATE, (50000, 3240), (80000, 5190)),
])
def test_av_prices_per_event_type(fixed_catalog, event_type, standard, premium):
    assert fixed_catalog.price_for(PackageCategory.AV, "standard", event_type) == Price.of(*standard)
    assert fixed_catalog.price_for(PackageCategory.AV, "premium", event_type) == Price.of(*premium)


def test_av_packages_keep_their_inclusions(fixed_catalog):
    corporate = fixed_catalog.lookup(PackageCategory.AV, "standard", EventType.CORPORATE)
    private = fixed_catalog.lookup(PackageCategory.AV, "standard", EventType.PRIVATE)

    assert "LED screen (12x08ft)" in corporate.includes
    assert "2 wireless microphones" in private.includes


def test_missing_meal_format_follows_event_type(fixed_catalog):
    assert fixed_catalog.resolve_meal_format(EventType.WEDDING) is MealFormat.FULL_DINNER
    assert fixed_catalog.resolve_meal_format(EventType.RAMADAN) is MealFormat.LIGHT_REFRESHMENTS
    assert fixed_catalog.resolve_meal_format(EventType.RAMADAN, "iftar") is MealFormat.IFTAR
    assert fixed_catalog.price_for(PackageCategory.CATERING, "silver", EventType.RAMADAN) == Price.of(145, 9)
