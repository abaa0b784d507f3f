from enum import Enum


class SpaceId(str, Enum):
    PRIMARY_FLOOR = "primary_floor"
    GARDEN_ANNEX = "garden_annex"
    SECONDARY_FLOOR = "secondary_floor"
    WHOLE_VENUE = "whole_venue"


class EventType(str, Enum):
    WEDDING = "wedding"
    CORPORATE = "corporate"
    PRIVATE = "private"
    RAMADAN = "ramadan"
    OTHER = "other"


class PackageCategory(str, Enum):
    DECOR = "decor"
    AV = "av"
    CATERING = "catering"


class MealFormat(str, Enum):
    LIGHT_REFRESHMENTS = "light_refreshments"
    FULL_DINNER = "full_dinner"
    IFTAR = "iftar"


class PaymentPlan(str, Enum):
    VENUE_ONLY_DEPOSIT = "venue_only_deposit"
    HALF_DEPOSIT = "half_deposit"
    FULL_PAYMENT = "full_payment"


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    REFUNDED = "refunded"
