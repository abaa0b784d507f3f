import os
import tempfile
from datetime import timedelta

# Settings are read at import time, so they have to be in place before app is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="venue-logs-"))
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
for name in ("REDIS_URL", "RESEND_API_KEY", "ADMIN_NOTIFICATION_EMAIL"):
    os.environ.pop(name, None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_catalog, get_db
from app.core.jwt import create_access_token
from app.db.session import Base
from app.main import app
from app.models.booking import Booking  # noqa: F401
from app.rules.catalog import build_default_catalog
from app.rules.validator import venue_today
from app.utils.rate_limit import booking_limiter


@pytest.fixture
def today():
    return venue_today()


@pytest.fixture
def catalog(today):
    """Garden annex goes live in 20 days, regular rates start in about a year."""
    return build_default_catalog(
        rate_era_cutoff=today + timedelta(days=400),
        garden_go_live=today + timedelta(days=20),
    )


@pytest.fixture
def event_date(today):
    return today + timedelta(days=60)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = Session()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def reset_rate_limit():
    booking_limiter.reset()
    yield
    booking_limiter.reset()


@pytest.fixture
def sent_notifications(monkeypatch):
    """Capture background notifications instead of calling the e-mail API."""
    calls = []
    monkeypatch.setattr(
        "app.api.routes.bookings.notify_booking_created",
        lambda summary: calls.append(("created", summary)),
    )
    monkeypatch.setattr(
        "app.api.routes.admin.notify_status_changed",
        lambda summary, status, reason=None: calls.append((status, summary)),
    )
    return calls


@pytest.fixture
def client(db_session, catalog, sent_notifications):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_catalog] = lambda: catalog
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": "admin@venue.mv", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def booking_payload(event_date):
    def build(**overrides):
        payload = {
            "full_name": "Aishath Shifa",
            "phone": "+9607771234",
            "email": "shifa@example.com",
            "event_type": "wedding",
            "event_date": event_date.isoformat(),
            "spaces": ["primary_floor"],
            "guest_count": 80,
            "decor_package": "classic",
            "catering_package": "silver",
            "meal_format": "full_dinner",
            "payment_plan": "half_deposit",
            "agreed_to_rules": True,
        }
        payload.update(overrides)
        return payload
    return build
