from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.core.dependencies import get_catalog, get_db, get_validator
from app.core.logging_config import get_logger
from app.core.redis import BOOKED_DATES_KEY, get_cache, set_cache
from app.models.enums import SpaceId
from app.rules.availability import (
    blocked_dates,
    blocked_spaces,
    whole_venue_dates,
)
from app.rules.catalog import RateCatalog
from app.rules.errors import (
    AvailabilityConflictError,
    BookingPersistenceError,
    SelectionInvalidError,
)
from app.rules.quote import compute_quote
from app.rules.selection import normalize_spaces
from app.rules.validator import SelectionValidator
from app.schemas.booking import (
    AvailabilityOut,
    BookedDateOut,
    BookingCreate,
    BookingCreated,
    PriceOut,
    QuoteOut,
    QuoteRequest,
    QuoteResponse,
    ViolationOut,
)
from app.utils.booking_store import fetch_booked_slots, save_booking
from app.utils.errors import domain_http_error, error_response
from app.utils.notifications import BookingSummary, notify_booking_created
from app.utils.rate_limit import booking_limiter, client_ip

router = APIRouter(prefix="/bookings", tags=["Bookings"])
logger = get_logger()


def _require_offered(catalog: RateCatalog, event_date: date, spaces):
    missing = [s.value for s in spaces if not catalog.is_offered(s, event_date)]
    if missing:
        raise error_response(
            "Space not available on this date",
            {"spaces": f"{', '.join(missing)} is not available on {event_date}"},
        )


# =====================================================================
# BOOKED DATES (anonymized)
# =====================================================================
@router.get("/booked-dates", response_model=list[BookedDateOut])
def booked_dates(start: Optional[date] = None, end: Optional[date] = None,
                 db: Session = Depends(get_db)):
    cacheable = start is None and end is None
    if cacheable:
        cached = get_cache(BOOKED_DATES_KEY)
        if cached is not None:
            return cached

    slots = fetch_booked_slots(db, start, end)
    data = [
        {"event_date": s.event_date.isoformat(), "space": s.space.value}
        for s in slots
    ]

    if cacheable:
        set_cache(BOOKED_DATES_KEY, data, ttl=60)

    return data


# =====================================================================
# AVAILABILITY FOR A SELECTION
# =====================================================================
@router.get("/availability", response_model=AvailabilityOut)
def availability(
    event_date: date,
    spaces: List[SpaceId] = Query(...),
    db: Session = Depends(get_db),
    catalog: RateCatalog = Depends(get_catalog),
):
    _require_offered(catalog, event_date, spaces)

    slots = fetch_booked_slots(db, event_date, event_date)
    blocked = blocked_spaces(event_date, spaces, slots)

    return AvailabilityOut(
        event_date=event_date,
        spaces=list(normalize_spaces(spaces)),
        blocked=bool(blocked),
        blocked_spaces=blocked,
        whole_venue_booked=event_date in whole_venue_dates(slots),
    )


# =====================================================================
# CALENDAR OF BLOCKED DATES
# =====================================================================
@router.get("/blocked-dates")
def blocked_dates_for_selection(
    spaces: List[SpaceId] = Query(...),
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
):
    slots = fetch_booked_slots(db, start, end)

    return {
        "spaces": [s.value for s in normalize_spaces(spaces)],
        "blocked_dates": [d.isoformat() for d in blocked_dates(spaces, slots)],
        "whole_venue_dates": [d.isoformat() for d in whole_venue_dates(slots)],
    }


# =====================================================================
# LIVE QUOTE (nothing persisted)
# =====================================================================
@router.post("/quote", response_model=QuoteResponse)
def quote(
    data: QuoteRequest,
    catalog: RateCatalog = Depends(get_catalog),
    validator: SelectionValidator = Depends(get_validator),
):
    candidate = data.to_candidate()
    result = validator.validate(candidate)
    priced = compute_quote(candidate, catalog)

    return QuoteResponse(
        valid=result.valid,
        violations=[
            ViolationOut(code=v.code.value, field=v.field, message=v.message)
            for v in result.violations
        ],
        quote=QuoteOut.from_quote(priced),
        amount_due=PriceOut.from_price(priced.amount_due(candidate.payment_plan)),
    )


# =====================================================================
# CREATE BOOKING REQUEST
# =====================================================================
@router.post("/", response_model=BookingCreated, status_code=201)
def create_booking(
    data: BookingCreate,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    catalog: RateCatalog = Depends(get_catalog),
    validator: SelectionValidator = Depends(get_validator),
):
    ip = client_ip(request)
    retry_after = booking_limiter.check(ip)
    if retry_after is not None:
        logger.warning(f"Rate limit exceeded | ip={ip}")
        raise HTTPException(
            status_code=429,
            detail={
                "message": f"Too many booking requests. Please try again in {retry_after} seconds.",
                "retry_after_seconds": retry_after,
            },
            headers={"Retry-After": str(retry_after)},
        )

    candidate = data.to_candidate()

    # ---- SELECTION RULES ----
    result = validator.validate(candidate)
    if not result.valid:
        raise domain_http_error(SelectionInvalidError(result.violations))

    # ---- DATE AVAILABILITY (re-checked on approval) ----
    spaces = candidate.normalized_spaces()
    slots = fetch_booked_slots(db, candidate.event_date, candidate.event_date)
    if blocked_spaces(candidate.event_date, spaces, slots):
        raise domain_http_error(AvailabilityConflictError(candidate.event_date, spaces))

    # ---- PRICE & PERSIST ----
    priced = compute_quote(candidate, catalog)
    try:
        booking = save_booking(db, candidate, priced)
    except BookingPersistenceError as e:
        raise domain_http_error(e)

    background_tasks.add_task(notify_booking_created, BookingSummary.from_booking(booking))

    return BookingCreated(
        booking_id=booking.id,
        status=booking.status,
        quote=QuoteOut.from_quote(priced),
        amount_due=PriceOut.from_price(priced.amount_due(candidate.payment_plan)),
    )
