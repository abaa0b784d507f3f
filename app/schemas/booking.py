from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.enums import (
    BookingStatus, EventType, MealFormat, PaymentPlan, PaymentStatus, SpaceId,
)
from app.rules.quote import Quote
from app.rules.selection import BookingCandidate, ContactInfo, ServiceSelection


class PriceOut(BaseModel):
    mvr: float
    usd: float

    @classmethod
    def from_price(cls, price):
        return cls(mvr=float(price.mvr), usd=float(price.usd))


class QuoteOut(BaseModel):
    venue: PriceOut
    decor: PriceOut
    av: PriceOut
    catering: PriceOut
    grand_total: PriceOut
    pre_opening_rate: bool
    payment_plans: dict[PaymentPlan, PriceOut]
    meal_format: Optional[MealFormat] = None

    @classmethod
    def from_quote(cls, quote: Quote):
        return cls.model_validate(quote.to_dict())


class ViolationOut(BaseModel):
    code: str
    field: str
    message: str


# ---------------- REQUESTS ----------------
class QuoteRequest(BaseModel):
    event_type: Optional[EventType] = None
    event_date: Optional[date] = None
    spaces: List[SpaceId] = []
    guest_count: int = 0

    decor_package: Optional[str] = None
    av_package: Optional[str] = None
    catering_package: Optional[str] = None
    meal_format: Optional[MealFormat] = None
    bring_own_vendor: bool = False
    payment_plan: PaymentPlan = PaymentPlan.HALF_DEPOSIT

    def to_selection(self) -> ServiceSelection:
        return ServiceSelection(
            decor_package=self.decor_package,
            av_package=self.av_package,
            catering_package=self.catering_package,
            meal_format=self.meal_format,
            bring_own_vendor=self.bring_own_vendor,
        )

    def to_candidate(self) -> BookingCandidate:
        return BookingCandidate(
            event_type=self.event_type,
            event_date=self.event_date,
            spaces=tuple(self.spaces),
            guest_count=self.guest_count,
            selection=self.to_selection(),
            payment_plan=self.payment_plan,
        )


class BookingCreate(QuoteRequest):
    full_name: str = Field(min_length=2, max_length=100)
    phone: str = Field(min_length=8, max_length=20)
    email: EmailStr = Field(max_length=255)
    company_name: Optional[str] = Field(default=None, max_length=100)

    event_type: EventType
    event_date: date

    notes: Optional[str] = Field(default=None, max_length=1000)
    agreed_to_rules: bool
    transfer_slip_url: Optional[str] = None

    @field_validator("agreed_to_rules")
    @classmethod
    def must_agree(cls, value: bool) -> bool:
        if not value:
            raise ValueError("You must agree to the rules and regulations")
        return value

    def to_candidate(self) -> BookingCandidate:
        candidate = super().to_candidate()
        return BookingCandidate(
            event_type=candidate.event_type,
            event_date=candidate.event_date,
            spaces=candidate.spaces,
            guest_count=candidate.guest_count,
            selection=candidate.selection,
            payment_plan=candidate.payment_plan,
            contact=ContactInfo(
                full_name=self.full_name,
                phone=self.phone,
                email=self.email,
                company_name=self.company_name,
            ),
            notes=self.notes,
            transfer_slip_url=self.transfer_slip_url,
        )


# ---------------- RESPONSES ----------------
class QuoteResponse(BaseModel):
    valid: bool
    violations: List[ViolationOut] = []
    quote: QuoteOut
    amount_due: PriceOut


class BookingCreated(BaseModel):
    booking_id: int
    status: BookingStatus
    quote: QuoteOut
    amount_due: PriceOut


class BookedDateOut(BaseModel):
    event_date: date
    space: SpaceId


class AvailabilityOut(BaseModel):
    event_date: date
    spaces: List[SpaceId]
    blocked: bool
    blocked_spaces: List[SpaceId] = []
    whole_venue_booked: bool


class BookingOut(BaseModel):
    id: int
    full_name: str
    phone: str
    email: str
    company_name: Optional[str] = None

    event_type: EventType
    event_date: date
    spaces: List[SpaceId]
    guest_count: int
    notes: Optional[str] = None
    transfer_slip_url: Optional[str] = None

    decor_package: Optional[str] = None
    av_package: Optional[str] = None
    catering_package: Optional[str] = None
    meal_format: Optional[MealFormat] = None
    bring_own_vendor: bool
    payment_plan: PaymentPlan

    grand_total_mvr: float
    grand_total_usd: float
    amount_due_mvr: float
    amount_due_usd: float

    status: BookingStatus
    payment_status: PaymentStatus
    created_at: datetime

    model_config = {"from_attributes": True}
