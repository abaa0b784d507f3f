from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, Integer, JSON, Numeric, String, Text
from app.db.session import Base
from app.models.enums import BookingStatus, EventType, MealFormat, PaymentPlan, PaymentStatus


def _values(enum_cls):
    return [member.value for member in enum_cls]


def _utcnow():
    return datetime.now(timezone.utc)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    # Contact
    full_name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=False)
    company_name = Column(String(100), nullable=True)

    # Event
    event_type = Column(Enum(EventType, name="eventtype", values_callable=_values), nullable=False)
    event_date = Column(Date, nullable=False, index=True)
    spaces = Column(JSON, nullable=False)  # full list of space ids
    guest_count = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    agreed_to_rules = Column(Boolean, nullable=False, default=False)
    agreed_at = Column(DateTime(timezone=True), nullable=True)
    transfer_slip_url = Column(String, nullable=True)

    # Chosen services
    decor_package = Column(String, nullable=True)
    av_package = Column(String, nullable=True)
    catering_package = Column(String, nullable=True)
    meal_format = Column(Enum(MealFormat, name="mealformat", values_callable=_values), nullable=True)
    bring_own_vendor = Column(Boolean, nullable=False, default=False)
    payment_plan = Column(Enum(PaymentPlan, name="paymentplan", values_callable=_values), nullable=False)

    # Quote snapshot (MVR / USD)
    venue_total_mvr = Column(Numeric(12, 2), nullable=False, default=0)
    venue_total_usd = Column(Numeric(12, 2), nullable=False, default=0)
    decor_total_mvr = Column(Numeric(12, 2), nullable=False, default=0)
    decor_total_usd = Column(Numeric(12, 2), nullable=False, default=0)
    av_total_mvr = Column(Numeric(12, 2), nullable=False, default=0)
    av_total_usd = Column(Numeric(12, 2), nullable=False, default=0)
    catering_total_mvr = Column(Numeric(12, 2), nullable=False, default=0)
    catering_total_usd = Column(Numeric(12, 2), nullable=False, default=0)
    grand_total_mvr = Column(Numeric(12, 2), nullable=False, default=0)
    grand_total_usd = Column(Numeric(12, 2), nullable=False, default=0)
    amount_due_mvr = Column(Numeric(12, 2), nullable=False, default=0)
    amount_due_usd = Column(Numeric(12, 2), nullable=False, default=0)

    status = Column(
        Enum(BookingStatus, name="bookingstatus", values_callable=_values),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    payment_status = Column(
        Enum(PaymentStatus, name="paymentstatus", values_callable=_values),
        nullable=False,
        default=PaymentStatus.PENDING,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
