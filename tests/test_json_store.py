"""
Tests for the JSON file booking store.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest

from venue_booking.application.utils.normalizer import normalise
from venue_booking.domain.entities.booking import BookingStatus
from venue_booking.infrastructure.store.json_store import JsonBookingStore


def test_json_store_persists_across_instances(rules, make_clock, make_ids):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = str(Path(tmpdir) / "bookings.json")
        store = JsonBookingStore(path=path, rules=rules, clock=make_clock(), ids=make_ids())

        draft = normalise({"name": "Kari", "date": "2025-06-14", "time": "10:00", "duration": 2, "spaces": "Salen"}, rules)
        booking = store.create(draft)
        store.update_status(booking.id, BookingStatus.approved)

        reloaded = JsonBookingStore(path=path, rules=rules, ids=make_ids("fresh"))
        restored = reloaded.get(booking.id)

        assert restored is not None
        assert restored.status is BookingStatus.approved
        assert restored.start == booking.start
        assert restored.end == booking.end
        assert restored.spaces == ("Salen",)
        assert restored.created_at == booking.created_at


def test_malformed_records_are_dropped_on_load(rules):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "good", "name": "Kari", "start": "2025-06-14T10:00:00+02:00", "duration": 2},
                    {"id": "bad", "name": "Ola", "start": "ikke en dato"},
                    "not even an object",
                ]
            ),
            encoding="utf-8",
        )

        store = JsonBookingStore(path=str(path), rules=rules)

        assert [b.id for b in store.list_admin()] == ["good"]


def test_corrupt_file_starts_empty(rules):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        path.write_text("{not json", encoding="utf-8")

        store = JsonBookingStore(path=str(path), rules=rules)

        assert store.list_admin() == []


def test_records_without_id_get_a_fresh_one(heuristic_rules, make_ids):
    """Browser-saved calendar events carry no id."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "title": "Reservert: Kari",
                        "start": "2025-06-14T08:00:00.000Z",
                        "end": "2025-06-14T10:00:00.000Z",
                        "extendedProps": {"name": "Kari", "email": "kari@example.com"},
                    }
                ]
            ),
            encoding="utf-8",
        )

        store = JsonBookingStore(path=str(path), rules=heuristic_rules, ids=make_ids("local"))

        (booking,) = store.list_admin()
        assert booking.id == "local-1"


def test_file_is_rewritten_after_create(rules, make_ids):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        store = JsonBookingStore(path=str(path), rules=rules, ids=make_ids())

        store.create(normalise({"name": "Kari", "date": "2025-06-14", "time": "10:00"}, rules))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [record["id"] for record in data] == ["booking-1"]
        assert data[0]["status"] == "pending"


@pytest.mark.parametrize(
    "bad",
    [
        {"id": "bad", "name": "Ola", "start": "2025-06-15T10:00:00+02:00", "duration": 1e300},
        {"id": "bad", "name": "Ola", "start": "9999-12-31T23:30:00+00:00"},
        {"id": "bad", "name": "Ola", "date": "9999-12-31", "time": "23:00"},
        {"id": "bad", "name": "Ola", "extendedProps": [1]},
        {"id": "bad", "name": "Ola", "extendedProps": "x"},
    ],
)
def test_out_of_range_records_are_dropped_on_load(rules, bad):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        good = {"id": "good", "name": "Kari", "start": "2025-06-14T10:00:00+02:00", "duration": 2}
        path.write_text(json.dumps([good, bad]), encoding="utf-8")

        store = JsonBookingStore(path=str(path), rules=rules)

        assert [b.id for b in store.list_admin()] == ["good"]


def test_unreadable_attendee_count_keeps_the_booking(rules):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bookings.json"
        record = {"id": "kept", "name": "Kari", "start": "2025-06-14T10:00:00+02:00", "attendees": "inf"}
        path.write_text(json.dumps([record]), encoding="utf-8")

        store = JsonBookingStore(path=str(path), rules=rules)

        (booking,) = store.list_admin()
        assert booking.id == "kept"
        assert booking.attendees is None
