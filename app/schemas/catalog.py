from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from app.models.enums import MealFormat, PackageCategory, SpaceId
from app.schemas.booking import PriceOut


class SpaceOut(BaseModel):
    id: SpaceId
    name: str
    description: str
    seating_capacity: int
    max_capacity: int
    price: PriceOut
    pre_opening_rate: bool
    available_from: Optional[date] = None


class PackageOut(BaseModel):
    package_id: str
    category: PackageCategory
    name: str
    description: str
    price: PriceOut
    per_guest: bool
    meal_format: Optional[MealFormat] = None
    includes: List[str] = []
