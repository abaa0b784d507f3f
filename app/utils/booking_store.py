"""Booking intake: the read and write side of the bookings table used by the rules engine."""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging_config import get_logger
from app.core.redis import BOOKED_DATES_KEY, delete_cache
from app.models.booking import Booking
from app.models.enums import BookingStatus, PaymentStatus, SpaceId
from app.rules.availability import BLOCKING_STATUSES, BookedSlot
from app.rules.errors import BookingNotFoundError, BookingPersistenceError
from app.rules.quote import Quote
from app.rules.selection import BookingCandidate

logger = get_logger()


def _slots(booking: Booking) -> list[BookedSlot]:
    return [
        BookedSlot(booking.event_date, SpaceId(space), BookingStatus(booking.status))
        for space in booking.spaces
    ]


def fetch_booked_slots(db: Session, start: Optional[date] = None, end: Optional[date] = None,
                       exclude_id: Optional[int] = None) -> list[BookedSlot]:
    """Anonymized read: one slot per reserved space, blocking bookings only."""
    query = db.query(Booking).filter(Booking.status.in_(list(BLOCKING_STATUSES)))
    if start is not None:
        query = query.filter(Booking.event_date >= start)
    if end is not None:
        query = query.filter(Booking.event_date <= end)
    if exclude_id is not None:
        query = query.filter(Booking.id != exclude_id)

    slots = []
    for booking in query.order_by(Booking.event_date).all():
        slots.extend(_slots(booking))
    return slots


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        raise BookingNotFoundError(booking_id)
    return booking


def save_booking(db: Session, candidate: BookingCandidate, quote: Quote) -> Booking:
    selection = candidate.selection
    contact = candidate.contact
    due = quote.amount_due(candidate.payment_plan)
    total = quote.grand_total

    booking = Booking(
        full_name=contact.full_name,
        phone=contact.phone,
        email=contact.email,
        company_name=contact.company_name,
        event_type=candidate.event_type,
        event_date=candidate.event_date,
        spaces=[space.value for space in candidate.normalized_spaces()],
        guest_count=candidate.guest_count,
        notes=candidate.notes,
        agreed_to_rules=True,
        agreed_at=datetime.now(timezone.utc),
        transfer_slip_url=candidate.transfer_slip_url,
        decor_package=selection.decor_package,
        av_package=selection.av_package,
        catering_package=selection.catering_package,
        meal_format=quote.meal_format,
        bring_own_vendor=selection.bring_own_vendor,
        payment_plan=candidate.payment_plan,
        venue_total_mvr=quote.venue.mvr,
        venue_total_usd=quote.venue.usd,
        decor_total_mvr=quote.decor.mvr,
        decor_total_usd=quote.decor.usd,
        av_total_mvr=quote.av.mvr,
        av_total_usd=quote.av.usd,
        catering_total_mvr=quote.catering.mvr,
        catering_total_usd=quote.catering.usd,
        grand_total_mvr=total.mvr,
        grand_total_usd=total.usd,
        amount_due_mvr=due.mvr,
        amount_due_usd=due.usd,
        status=BookingStatus.PENDING,
        payment_status=PaymentStatus.PENDING,
    )

    try:
        db.add(booking)
        db.commit()
        db.refresh(booking)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Booking write failed | email={contact.email} -> {e}")
        raise BookingPersistenceError() from e

    delete_cache(BOOKED_DATES_KEY)
    logger.bind(log_type="booking").info(
        f"Booking Created | id={booking.id} | date={booking.event_date} | spaces={booking.spaces}"
    )
    return booking


def update_booking(db: Session, booking: Booking, **changes) -> Booking:
    for key, value in changes.items():
        setattr(booking, key, value)

    try:
        db.commit()
        db.refresh(booking)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Booking update failed | id={booking.id} -> {e}")
        raise BookingPersistenceError() from e

    delete_cache(BOOKED_DATES_KEY)
    return booking
