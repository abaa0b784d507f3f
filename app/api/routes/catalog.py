from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from app.core.dependencies import get_catalog
from app.models.enums import EventType, MealFormat, PackageCategory
from app.rules.catalog import RateCatalog
from app.schemas.booking import PriceOut
from app.schemas.catalog import PackageOut, SpaceOut

router = APIRouter(prefix="/catalog", tags=["Catalog"])


# =====================================================================
# SPACES OFFERED ON A DATE
# =====================================================================
@router.get("/spaces", response_model=list[SpaceOut])
def list_spaces(event_date: Optional[date] = None, catalog: RateCatalog = Depends(get_catalog)):
    return [
        SpaceOut(
            id=space.id,
            name=space.name,
            description=space.description,
            seating_capacity=space.seating_capacity,
            max_capacity=space.max_capacity,
            price=PriceOut.from_price(catalog.space_price(space.id, event_date)),
            pre_opening_rate=catalog.is_pre_opening(event_date),
            available_from=space.available_from,
        )
        for space in catalog.offered_spaces(event_date)
    ]


# =====================================================================
# PACKAGES FOR AN EVENT TYPE
# =====================================================================
@router.get("/packages/{category}", response_model=list[PackageOut])
def list_packages(
    category: PackageCategory,
    event_type: EventType,
    meal_format: Optional[MealFormat] = None,
    catalog: RateCatalog = Depends(get_catalog),
):
    return [
        PackageOut(
            package_id=rate.package_id,
            category=rate.category,
            name=rate.name,
            description=rate.description,
            price=PriceOut.from_price(rate.price),
            per_guest=rate.per_guest,
            meal_format=rate.meal_format,
            includes=list(rate.includes),
        )
        for rate in catalog.packages_for(category, event_type, meal_format)
    ]


# =====================================================================
# CATERING FORMATS
# =====================================================================
@router.get("/meal-formats")
def list_meal_formats(event_type: EventType, catalog: RateCatalog = Depends(get_catalog)):
    return {
        "event_type": event_type.value,
        "meal_formats": [f.value for f in catalog.meal_formats(event_type)],
    }
