"""Venue rate tables.

Pure data: one row per space and one row per (event type, category,
package id, meal format). Amounts are native in each currency (MVR, USD);
neither column is derived from the other.
"""

from app.models.enums import EventType, MealFormat, PackageCategory, SpaceId

E = EventType
DECOR = PackageCategory.DECOR
AV = PackageCategory.AV
CATERING = PackageCategory.CATERING

OWN_VENDOR_FEE = (5000, 325)

# id, name, description, seating, max capacity, pre-opening (mvr, usd), regular (mvr, usd)
SPACES = [
    (
        SpaceId.PRIMARY_FLOOR, "Floor 1 - Grand Ballroom",
        "Elegant main floor with marble finishes and crystal chandeliers",
        200, 250, (25000, 1620), (35000, 2270),
    ),
    (
        SpaceId.GARDEN_ANNEX, "Floor 1 - Outdoor Garden",
        "Outdoor garden annex opening off the ballroom",
        100, 150, (10000, 650), (15000, 975),
    ),
    (
        SpaceId.SECONDARY_FLOOR, "Floor 2 - Skyview Terrace",
        "Upper level with panoramic views and intimate setting",
        180, 220, (20000, 1300), (30000, 1945),
    ),
    (
        SpaceId.WHOLE_VENUE, "Entire Venue",
        "Complete venue access including all floors and garden",
        480, 620, (50000, 3240), (70000, 4540),
    ),
]

_WEDDING_DECOR = [
    ("classic", "Classic", "Essential venue styling for an elegant touch", (20000, 1300), (
        "Backdrop arch with themed florals",
        "Round tables with white overlay",
        "Basic floral centerpieces (15 tables)",
        "Welcome signage",
        "Basic lighting setup",
    )),
    ("standard", "Standard", "Premium floral arrangements & enhanced lighting", (50000, 3240), (
        "Backdrop arch with themed florals",
        "Premium floral centerpieces (15 tables)",
        "Candle arrangements",
        "Enhanced ambient lighting",
        "Ceiling decor",
    )),
    ("premium", "Premium", "Full venue transformation with luxury touches", (100000, 6485), (
        "Luxury floral centerpieces (all tables)",
        "Professional lighting design",
        "Grand entrance installation",
        "Elaborate stage design",
        "Photo corners and hanging installations",
    )),
]

_PRIVATE_DECOR = [
    ("classic", "Classic", "Essential party styling", (10000, 650), (
        "Backdrop panels with balloon pillar",
        "1 sunboard cutout (2ft)",
        "10 balloon centerpieces",
    )),
    ("standard", "Standard", "Themed backdrop with cutouts and cake table", (20000, 1300), (
        "Backdrop decoration with balloon pillar",
        "2 sunboard cutouts (2ft)",
        "10 centerpieces",
        "Cake table",
    )),
    ("premium", "Premium", "Full party transformation", (40000, 2600), (
        "4 sunboard cutouts (2ft)",
        "Ceiling decoration",
        "Jumping bounce house",
    )),
]

_RAMADAN_DECOR = [
    ("classic", "Classic", "Essential Arabic styling for Ramadan gatherings", (5000, 325), (
        "Welcome signage for group",
        "Ceiling Arabic hangers",
    )),
    ("standard", "Standard", "Enhanced Ramadan ambiance with centerpieces", (10000, 650), (
        "Welcome signage for group",
        "Ceiling Arabic hangers",
        "Table centerpieces",
    )),
    ("premium", "Premium", "Full Ramadan transformation with photo corner", (20000, 1300), (
        "Ceiling Arabic hangers",
        "Table centerpieces",
        "Photo corner with branding",
    )),
]

# AV rows carry no amount; prices depend on the event type (see AV_PRICES)
_STANDARD_AV = [
    ("basic", "Basic AV", "Essential audio setup", (
        "Sound system",
        "Background music playback",
    )),
    ("standard", "Standard AV", "Audio with microphones and ambient lights", (
        "Sound system",
        "2 wireless microphones",
        "City lights around the venue",
    )),
    ("premium", "Premium AV", "Complete sound & lighting experience", (
        "Full lighting setup",
        "2 wireless microphones",
        "Sound & lighting technician",
    )),
]

_CORPORATE_AV = [
    ("basic", "Basic AV", "Professional stage setup with sound system", (
        "Riser with black carpet (12x24ft)",
        "Stage lighting",
        "Line array sound",
    )),
    ("standard", "Standard AV", "Full stage setup with LED screen", (
        "Riser with black carpet (12x24ft)",
        "Line array sound with controller",
        "LED screen (12x08ft)",
    )),
    ("premium", "Premium AV", "Premium stage with large LED screen", (
        "Enhanced stage lighting",
        "LED screen (20x10ft)",
        "Red carpet walkway",
    )),
]

# basic, standard, premium (mvr, usd)
AV_PRICES = {
    E.WEDDING: ((5000, 325), (10000, 650), (25000, 1620)),
    E.CORPORATE: ((25000, 1620), (50000, 3240), (80000, 5190)),
    E.PRIVATE: ((5000, 325), (15000, 975), (25000, 1620)),
    E.RAMADAN: ((5000, 325), (15000, 975), (25000, 1620)),
    E.OTHER: ((5000, 325), (15000, 975), (50000, 3245)),
}


def _priced(rows, prices):
    return [
        (package_id, name, description, amount, includes)
        for (package_id, name, description, includes), amount in zip(rows, prices)
    ]


# Per guest
_LIGHT_REFRESHMENTS = [
    ("silver", "Silver Package", "Classic canape and short eats selection", (145, 9), ()),
    ("gold", "Gold Package", "Enhanced canape with premium options", (199, 13), ()),
    ("platinum", "Platinum Package", "Luxury canape experience", (245, 16), ()),
]

_FULL_DINNER = [
    ("silver", "Silver Package", "Classic dinner menu", (267, 17), ()),
    ("gold", "Gold Package", "Enhanced dinner with live cooking station", (322, 21), ()),
    ("platinum", "Platinum Package", "Luxury dinner with multiple live stations", (436, 28), ()),
]

_IFTAR = [
    ("silver", "Silver Iftar", "Traditional iftar spread", (280, 18), ()),
    ("gold", "Gold Iftar", "Premium iftar experience", (360, 23), ()),
    ("platinum", "Platinum Iftar", "Luxury iftar feast", (420, 27), ()),
]

DECOR_BY_EVENT = {
    E.WEDDING: _WEDDING_DECOR,
    E.CORPORATE: _WEDDING_DECOR,
    E.PRIVATE: _PRIVATE_DECOR,
    E.RAMADAN: _RAMADAN_DECOR,
    E.OTHER: _WEDDING_DECOR,
}

AV_BY_EVENT = {
    event_type: _priced(_CORPORATE_AV if event_type is E.CORPORATE else _STANDARD_AV, prices)
    for event_type, prices in AV_PRICES.items()
}

CATERING_BY_EVENT = {
    event_type: {
        MealFormat.LIGHT_REFRESHMENTS: _LIGHT_REFRESHMENTS,
        MealFormat.FULL_DINNER: _FULL_DINNER,
    }
    for event_type in EventType
}
CATERING_BY_EVENT[E.RAMADAN] = {
    MealFormat.LIGHT_REFRESHMENTS: _LIGHT_REFRESHMENTS,
    MealFormat.IFTAR: _IFTAR,
}


def package_rows():
    """Yield (event_type, category, meal_format, row) for every package."""
    for event_type, rows in DECOR_BY_EVENT.items():
        for row in rows:
            yield event_type, DECOR, None, row
    for event_type, rows in AV_BY_EVENT.items():
        for row in rows:
            yield event_type, AV, None, row
    for event_type, formats in CATERING_BY_EVENT.items():
        for meal_format, rows in formats.items():
            for row in rows:
                yield event_type, CATERING, meal_format, row
