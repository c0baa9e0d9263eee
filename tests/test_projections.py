"""
Tests for the public, admin and email renderings of a booking.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from venue_booking.application.utils.projections import (
    admin_entry,
    board_notification,
    calendar_event,
    public_entry,
    requester_receipt,
    status_notification,
)
from venue_booking.domain.entities.booking import Booking, BookingStatus, Requester

OSLO = ZoneInfo("Europe/Oslo")


def _booking(status: BookingStatus = BookingStatus.pending, **kwargs) -> Booking:
    start = datetime(2025, 6, 14, 18, 0, tzinfo=OSLO)
    return Booking(
        id="b-1",
        start=start,
        end=start + timedelta(hours=3),
        requester=Requester(name="Kari <Nordmann>", email="kari@example.com", phone="99887766"),
        status=status,
        event_type="Bursdag",
        spaces=("Salen",),
        message="Linje en\nLinje to",
        **kwargs,
    )


def test_public_projections_never_leak_contact_details():
    booking = _booking()

    for rendering in (public_entry(booking), calendar_event(booking)):
        flat = repr(rendering)
        assert "kari@example.com" not in flat
        assert "99887766" not in flat
        assert "Linje en" not in flat
        assert "Kari" not in flat


def test_public_status_is_coarsened():
    assert public_entry(_booking(BookingStatus.approved))["status"] == "booked"
    assert public_entry(_booking(BookingStatus.confirmed))["status"] == "booked"
    assert public_entry(_booking(BookingStatus.blocked))["status"] == "blocked"
    assert public_entry(_booking())["status"] == "pending"


def test_calendar_event_style_follows_status():
    public = calendar_event(_booking(BookingStatus.approved))
    admin = calendar_event(_booking(BookingStatus.approved), admin=True)

    assert public["classNames"] == ["booking-booked"]
    assert public["title"] == "Reservert"
    assert admin["classNames"] == ["booking-approved"]
    assert admin["title"] == "Bursdag: Kari <Nordmann>"
    assert public["start"] == "2025-06-14T18:00:00+02:00"
    assert public["end"] == "2025-06-14T21:00:00+02:00"


def test_admin_entry_has_full_detail():
    entry = admin_entry(_booking())

    assert entry["email"] == "kari@example.com"
    assert entry["phone"] == "99887766"
    assert entry["duration"] == 3
    assert entry["spaces"] == ["Salen"]


def test_board_notification_carries_action_links_and_escapes_html():
    content = board_notification(
        _booking(),
        approve_link="https://booking.example/booking/approve?id=b-1",
        reject_link="https://booking.example/booking/reject?id=b-1",
        venue_name="Bjørkvang",
    )

    assert content.subject == "Ny bookingforespørsel – Bursdag – 2025-06-14 18:00"
    assert "https://booking.example/booking/approve?id=b-1" in content.text
    assert "https://booking.example/booking/reject?id=b-1" in content.html
    assert "Kari &lt;Nordmann&gt;" in content.html
    assert "Kari <Nordmann>" not in content.html
    assert "Linje en<br>Linje to" in content.html
    assert "Tilleggsbehov: Ingen" in content.text


def test_receipt_and_status_messages():
    receipt = requester_receipt(_booking(), "Bjørkvang")
    assert "2025-06-14 kl 18:00" in receipt.text
    assert "styret" in receipt.text

    approved = status_notification(_booking(BookingStatus.approved), "Bjørkvang")
    rejected = status_notification(_booking(BookingStatus.rejected), "Bjørkvang")
    assert approved.subject == "Booking bekreftet"
    assert rejected.subject == "Booking avvist"
    assert "avvist" in rejected.html
