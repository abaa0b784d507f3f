from collections import Counter

from fastapi import APIRouter, Depends
from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from app.core.dependencies import get_db, require_admin
from app.core.logging_config import get_logger
from app.models.booking import Booking
from app.models.enums import BookingStatus

router = APIRouter(prefix="/admin-analytics", tags=["Admin Analytics"])
logger = get_logger()

EARNING_STATUSES = [BookingStatus.CONFIRMED, BookingStatus.COMPLETED]


# =====================================================================
# 1. SUMMARY
# =====================================================================
@router.get("/summary")
def summary(admin: str = Depends(require_admin), db: Session = Depends(get_db)):
    by_status = {
        BookingStatus(status).value: count
        for status, count in db.query(Booking.status, func.count(Booking.id))
        .group_by(Booking.status)
        .all()
    }

    by_space = Counter()
    for (spaces,) in db.query(Booking.spaces).all():
        by_space.update(spaces)

    revenue_mvr, revenue_usd = (
        db.query(func.sum(Booking.grand_total_mvr), func.sum(Booking.grand_total_usd))
        .filter(Booking.status.in_(EARNING_STATUSES))
        .one()
    )

    logger.bind(log_type="admin").info(f"Admin checked booking summary | by={admin}")

    return {
        "bookings_by_status": {s.value: by_status.get(s.value, 0) for s in BookingStatus},
        "bookings_by_space": dict(by_space),
        "revenue": {"mvr": float(revenue_mvr or 0), "usd": float(revenue_usd or 0)},
    }


# =====================================================================
# 2. MONTHLY REVENUE
# =====================================================================
@router.get("/revenue/monthly")
def monthly_revenue(year: int, admin: str = Depends(require_admin), db: Session = Depends(get_db)):
    month = extract("month", Booking.event_date)

    results = (
        db.query(
            month.label("month"),
            func.sum(Booking.grand_total_mvr).label("revenue_mvr"),
            func.sum(Booking.grand_total_usd).label("revenue_usd"),
        )
        .filter(
            extract("year", Booking.event_date) == year,
            Booking.status.in_(EARNING_STATUSES),
        )
        .group_by(month)
        .order_by(month)
        .all()
    )

    monthly_data = [
        {
            "month": int(r.month),
            "revenue": {"mvr": float(r.revenue_mvr or 0), "usd": float(r.revenue_usd or 0)},
        }
        for r in results
    ]

    logger.bind(log_type="admin").info(f"Admin checked monthly revenue for {year}")

    return {"year": year, "monthly_revenue": monthly_data}
