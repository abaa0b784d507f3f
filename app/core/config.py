import os
from datetime import date
from dotenv import load_dotenv

load_dotenv()


def _env_date(name: str, default: str) -> date:
    return date.fromisoformat(os.getenv(name, default))


# -------- DATABASE --------
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./venue_booking.db")

# -------- AUTH --------
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# -------- CACHE / LOGS --------
REDIS_URL = os.getenv("REDIS_URL")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# -------- VENUE CALENDAR --------
VENUE_TIMEZONE = os.getenv("VENUE_TIMEZONE", "Indian/Maldives")
RATE_ERA_CUTOFF = _env_date("RATE_ERA_CUTOFF", "2027-01-01")
GARDEN_ANNEX_GO_LIVE = _env_date("GARDEN_ANNEX_GO_LIVE", "2026-12-01")
MAX_GUEST_COUNT = 1000

# -------- NOTIFICATIONS --------
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
RESEND_API_URL = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
NOTIFICATION_FROM = os.getenv("NOTIFICATION_FROM", "Pavilion by Gold <bookings@pavilionbygold.mv>")
ADMIN_NOTIFICATION_EMAIL = os.getenv("ADMIN_NOTIFICATION_EMAIL")

# -------- PUBLIC BOOKING ENDPOINT --------
BOOKING_RATE_LIMIT_MAX = int(os.getenv("BOOKING_RATE_LIMIT_MAX", 3))
BOOKING_RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("BOOKING_RATE_LIMIT_WINDOW_SECONDS", 300))
