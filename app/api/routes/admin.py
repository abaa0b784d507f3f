from collections import defaultdict
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.dependencies import get_db, require_admin
from app.core.logging_config import get_logger
from app.models.booking import Booking
from app.models.enums import BookingStatus, PaymentPlan, SpaceId
from app.rules.availability import blocked_spaces
from app.rules.catalog import Price
from app.rules.errors import (
    AvailabilityConflictError,
    BookingNotFoundError,
    BookingPersistenceError,
    InvalidStatusTransitionError,
)
from app.rules.lifecycle import transition
from app.schemas.admin import InvoiceLine, InvoiceOut, PaymentStatusUpdate, StatusUpdate
from app.schemas.booking import BookingOut, PriceOut
from app.utils.booking_store import fetch_booked_slots, get_booking, update_booking
from app.utils.errors import domain_http_error
from app.utils.notifications import SPACE_LABELS, BookingSummary, notify_status_changed

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = get_logger()


def _load(db: Session, booking_id: int) -> Booking:
    try:
        return get_booking(db, booking_id)
    except BookingNotFoundError as e:
        raise domain_http_error(e)


def _price(mvr, usd) -> Price:
    return Price.of(mvr or 0, usd or 0)


# =====================================================================
# LIST / DETAIL
# =====================================================================
@router.get("/bookings", response_model=list[BookingOut])
def list_bookings(
    status: Optional[BookingStatus] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    admin: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    query = db.query(Booking)
    if status is not None:
        query = query.filter(Booking.status == status)
    if start is not None:
        query = query.filter(Booking.event_date >= start)
    if end is not None:
        query = query.filter(Booking.event_date <= end)

    return query.order_by(Booking.event_date.asc(), Booking.id.asc()).all()


@router.get("/bookings/{booking_id}", response_model=BookingOut)
def booking_detail(booking_id: int, admin: str = Depends(require_admin), db: Session = Depends(get_db)):
    return _load(db, booking_id)


# =====================================================================
# STATUS LIFECYCLE
# =====================================================================
@router.post("/bookings/{booking_id}/status", response_model=BookingOut)
def change_status(
    booking_id: int,
    data: StatusUpdate,
    background_tasks: BackgroundTasks,
    admin: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    booking = _load(db, booking_id)
    current = BookingStatus(booking.status)

    try:
        target = transition(current, data.status)
    except InvalidStatusTransitionError as e:
        raise domain_http_error(e)

    # Server-side re-check: two approved bookings may never share a date+space
    if target is BookingStatus.APPROVED:
        spaces = [SpaceId(s) for s in booking.spaces]
        slots = fetch_booked_slots(db, booking.event_date, booking.event_date, exclude_id=booking.id)
        if blocked_spaces(booking.event_date, spaces, slots):
            raise domain_http_error(AvailabilityConflictError(booking.event_date, spaces))

    try:
        booking = update_booking(db, booking, status=target)
    except BookingPersistenceError as e:
        raise domain_http_error(e)

    logger.bind(log_type="admin").info(
        f"Booking status | id={booking.id} | {current.value} -> {target.value} | by={admin}"
        + (f" | reason={data.reason}" if data.reason else "")
    )
    background_tasks.add_task(
        notify_status_changed, BookingSummary.from_booking(booking), target.value, data.reason
    )

    return booking


@router.patch("/bookings/{booking_id}/payment-status", response_model=BookingOut)
def change_payment_status(
    booking_id: int,
    data: PaymentStatusUpdate,
    admin: str = Depends(require_admin),
    db: Session = Depends(get_db),
):
    booking = _load(db, booking_id)

    try:
        booking = update_booking(db, booking, payment_status=data.payment_status)
    except BookingPersistenceError as e:
        raise domain_http_error(e)

    logger.bind(log_type="admin").info(
        f"Payment status | id={booking.id} | {data.payment_status.value} | by={admin}"
    )
    return booking


# =====================================================================
# INVOICE FIGURES
# =====================================================================
@router.get("/bookings/{booking_id}/invoice", response_model=InvoiceOut)
def invoice(booking_id: int, admin: str = Depends(require_admin), db: Session = Depends(get_db)):
    b = _load(db, booking_id)

    venue_label = "Venue hire - " + ", ".join(SPACE_LABELS.get(s, s) for s in b.spaces)
    if b.bring_own_vendor:
        venue_label += " (incl. own vendor coordination fee)"

    lines = [InvoiceLine(
        description=venue_label,
        amount=PriceOut.from_price(_price(b.venue_total_mvr, b.venue_total_usd)),
    )]
    if b.decor_package:
        lines.append(InvoiceLine(
            description=f"Decor - {b.decor_package}",
            amount=PriceOut.from_price(_price(b.decor_total_mvr, b.decor_total_usd)),
        ))
    if b.av_package:
        lines.append(InvoiceLine(
            description=f"Audio visual - {b.av_package}",
            amount=PriceOut.from_price(_price(b.av_total_mvr, b.av_total_usd)),
        ))
    if b.catering_package:
        lines.append(InvoiceLine(
            description=f"Catering - {b.catering_package} x {b.guest_count} guests",
            amount=PriceOut.from_price(_price(b.catering_total_mvr, b.catering_total_usd)),
        ))

    total = _price(b.grand_total_mvr, b.grand_total_usd)
    deposit = _price(b.amount_due_mvr, b.amount_due_usd)
    balance = total - deposit

    return InvoiceOut(
        invoice_number=f"PBG-INV-{b.created_at.year}-{b.id:04d}",
        booking_id=b.id,
        client_name=b.full_name,
        client_email=b.email,
        client_phone=b.phone,
        event_date=b.event_date,
        spaces=b.spaces,
        guest_count=b.guest_count,
        line_items=lines,
        grand_total=PriceOut.from_price(total),
        payment_plan=PaymentPlan(b.payment_plan),
        deposit=PriceOut.from_price(deposit),
        balance=PriceOut.from_price(balance),
        payment_status=b.payment_status,
    )


# =====================================================================
# MONTH CALENDAR
# =====================================================================
@router.get("/calendar")
def calendar(month: str, admin: str = Depends(require_admin), db: Session = Depends(get_db)):
    try:
        year, month_num = map(int, month.split("-"))
        start_date = date(year, month_num, 1)
        end_date = (date(year + month_num // 12, (month_num % 12) + 1, 1)
                    - timedelta(days=1))
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid month format")

    bookings = (
        db.query(Booking)
        .filter(Booking.event_date >= start_date, Booking.event_date <= end_date)
        .order_by(Booking.event_date.asc(), Booking.id.asc())
        .all()
    )

    days = defaultdict(list)
    for b in bookings:
        days[b.event_date.isoformat()].append({
            "booking_id": b.id,
            "full_name": b.full_name,
            "spaces": b.spaces,
            "status": BookingStatus(b.status).value,
        })

    return {
        "month": month,
        "days": [{"date": d, "bookings": items} for d, items in sorted(days.items())],
    }
