"""Booking e-mails sent through the Resend HTTP API.

Every sender here is fire-and-forget: failures are logged on the
notification channel and never raised back to the caller.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from app.core import config
from app.core.logging_config import get_logger

logger = get_logger()

EVENT_TYPE_LABELS = {
    "wedding": "Wedding",
    "corporate": "Corporate Event",
    "private": "Private Party",
    "ramadan": "Ramadan Event",
    "other": "Other",
}

SPACE_LABELS = {
    "primary_floor": "Floor 1 - Grand Ballroom",
    "garden_annex": "Floor 1 - Outdoor Garden",
    "secondary_floor": "Floor 2 - Skyview Terrace",
    "whole_venue": "Entire Venue",
}

STATUS_MESSAGES = {
    "approved": "Good news! Your booking request has been approved. We will send your invoice shortly.",
    "rejected": "Unfortunately we are unable to accommodate your booking request.",
    "confirmed": "Your booking is confirmed. We look forward to hosting your event.",
    "cancelled": "Your booking has been cancelled.",
}


@dataclass(frozen=True)
class BookingSummary:
    booking_id: int
    full_name: str
    email: str
    phone: str
    event_type: str
    event_date: str
    spaces: tuple
    guest_count: int
    company_name: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_booking(cls, booking):
        return cls(
            booking_id=booking.id,
            full_name=booking.full_name,
            email=booking.email,
            phone=booking.phone,
            event_type=getattr(booking.event_type, "value", booking.event_type),
            event_date=booking.event_date.isoformat(),
            spaces=tuple(booking.spaces),
            guest_count=booking.guest_count,
            company_name=booking.company_name,
            notes=booking.notes,
        )

    @property
    def event_label(self) -> str:
        return EVENT_TYPE_LABELS.get(self.event_type, self.event_type)

    @property
    def space_label(self) -> str:
        return ", ".join(SPACE_LABELS.get(s, s) for s in self.spaces)

    def details(self) -> str:
        lines = [
            f"Event Type: {self.event_label}",
            f"Date: {self.event_date}",
            f"Space: {self.space_label}",
            f"Guests: {self.guest_count} people",
        ]
        if self.notes:
            lines.append(f"Notes: {self.notes}")
        return "\n".join(lines)


def send_email(recipient: str, subject: str, body: str) -> bool:
    """Send one plain-text e-mail. Returns False when it was not delivered."""
    if not config.RESEND_API_KEY:
        logger.bind(log_type="notification").info(f"E-mail skipped, no API key | to={recipient}")
        return False

    try:
        response = httpx.post(
            config.RESEND_API_URL,
            headers={"Authorization": f"Bearer {config.RESEND_API_KEY}"},
            json={
                "from": config.NOTIFICATION_FROM,
                "to": [recipient],
                "subject": subject,
                "text": body,
            },
            timeout=10.0,
        )
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.bind(log_type="notification").error(f"E-mail failed | to={recipient} -> {e}")
        return False

    logger.bind(log_type="notification").info(f"E-mail sent | to={recipient} | {subject}")
    return True


def notify_booking_created(summary: BookingSummary) -> None:
    if config.ADMIN_NOTIFICATION_EMAIL:
        contact = [f"Name: {summary.full_name}", f"Email: {summary.email}", f"Phone: {summary.phone}"]
        if summary.company_name:
            contact.append(f"Company: {summary.company_name}")
        send_email(
            config.ADMIN_NOTIFICATION_EMAIL,
            f"New Booking Request: {summary.full_name} - {summary.event_label}",
            "\n".join(contact) + "\n\n" + summary.details()
            + "\n\nLog in to the admin dashboard to review and respond to this booking.",
        )

    send_email(
        summary.email,
        "Thank You for Your Booking Request - Pavilion by Gold",
        f"Dear {summary.full_name},\n\n"
        "We have received your booking request and our team will review it shortly.\n\n"
        + summary.details()
        + "\n\nOnce confirmed, we will send you an invoice for the deposit.\n\n"
        "Warm regards,\nThe Pavilion by Gold Team",
    )


def notify_status_changed(summary: BookingSummary, status: str, reason: Optional[str] = None) -> None:
    message = STATUS_MESSAGES.get(status)
    if not message:
        return
    if reason:
        message += f"\n\nNote from our team: {reason}"

    send_email(
        summary.email,
        f"Booking #{summary.booking_id} {status.capitalize()} - Pavilion by Gold",
        f"Dear {summary.full_name},\n\n{message}\n\n{summary.details()}\n\n"
        "Warm regards,\nThe Pavilion by Gold Team",
    )
