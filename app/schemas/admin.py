from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.enums import BookingStatus, PaymentPlan, PaymentStatus, SpaceId
from app.schemas.booking import PriceOut


class StatusUpdate(BaseModel):
    status: BookingStatus
    reason: Optional[str] = Field(default=None, max_length=500)


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus


class InvoiceLine(BaseModel):
    description: str
    amount: PriceOut


class InvoiceOut(BaseModel):
    invoice_number: str
    booking_id: int
    client_name: str
    client_email: str
    client_phone: str
    event_date: date
    spaces: List[SpaceId]
    guest_count: int
    line_items: List[InvoiceLine]
    grand_total: PriceOut
    payment_plan: PaymentPlan
    deposit: PriceOut
    balance: PriceOut
    payment_status: PaymentStatus
