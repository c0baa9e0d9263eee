"""
Tests for overlap detection between a requested window and existing bookings.
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from venue_booking.application.utils.conflicts import find_conflict, overlaps, spaces_overlap
from venue_booking.domain.entities.booking import Booking, BookingStatus, Requester

OSLO = ZoneInfo("Europe/Oslo")


def _at(hour: int) -> datetime:
    return datetime(2025, 6, 14, hour, 0, tzinfo=OSLO)


def _booking(booking_id: str, start: int, end: int, spaces=(), status=BookingStatus.pending) -> Booking:
    return Booking(
        id=booking_id,
        start=_at(start),
        end=_at(end),
        requester=Requester(name="Kari", email="kari@example.com"),
        spaces=tuple(spaces),
        status=status,
    )


def test_half_open_boundary():
    existing = [_booking("a", 10, 12)]

    assert find_conflict(_at(12), _at(14), existing) is None
    assert find_conflict(_at(8), _at(10), existing) is None
    assert find_conflict(_at(11), _at(13), existing).id == "a"


def test_overlap_is_symmetric():
    assert overlaps(_at(10), _at(12), _at(11), _at(13))
    assert overlaps(_at(11), _at(13), _at(10), _at(12))
    assert not overlaps(_at(10), _at(12), _at(12), _at(13))


def test_first_encountered_conflict_is_reported():
    existing = [_booking("late", 12, 16), _booking("early", 9, 13)]

    assert find_conflict(_at(11), _at(14), existing).id == "late"


def test_different_rooms_do_not_conflict():
    existing = [_booking("a", 10, 12, spaces=["Salen"])]

    assert find_conflict(_at(10), _at(12), existing, spaces=["Peisestua"]) is None
    assert find_conflict(_at(10), _at(12), existing, spaces=["salen"]).id == "a"


def test_time_only_mode_ignores_rooms():
    existing = [_booking("a", 10, 12, spaces=["Salen"])]

    conflict = find_conflict(_at(10), _at(12), existing, spaces=["Peisestua"], require_space_overlap=False)
    assert conflict.id == "a"


def test_entire_venue_and_empty_selection_claim_every_room():
    assert spaces_overlap(["Hele lokalet"], ["Salen"])
    assert spaces_overlap([], ["Salen"])
    assert not spaces_overlap(["Kjøkkenet"], ["Salen"])


def test_rejected_bookings_do_not_block():
    existing = [_booking("a", 10, 12, status=BookingStatus.rejected)]

    assert find_conflict(_at(10), _at(12), existing) is None


def test_malformed_records_are_skipped():
    existing = [
        {"id": "broken", "start": "garbage", "end": "2025-06-14T12:00:00+02:00"},
        {"id": "empty", "start": "2025-06-14T12:00:00+02:00", "end": "2025-06-14T10:00:00+02:00"},
        {"id": "ok", "start": "2025-06-14T10:00:00+02:00", "end": "2025-06-14T12:00:00+02:00"},
    ]

    assert find_conflict(_at(11), _at(13), existing)["id"] == "ok"
