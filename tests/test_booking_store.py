"""
Tests for the in-memory booking store.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from venue_booking.application.exceptions import ConflictError
from venue_booking.domain.entities.booking import Booking, BookingStatus, Requester
from venue_booking.infrastructure.store.memory_store import MemoryBookingStore

OSLO = ZoneInfo("Europe/Oslo")


def _draft(hour: int = 10, hours: int = 2, **kwargs) -> Booking:
    start = datetime(2025, 6, 14, hour, 0, tzinfo=OSLO)
    return Booking(
        start=start,
        end=start + timedelta(hours=hours),
        requester=Requester(name="Kari", email="kari@example.com", phone="99887766"),
        message="Hemmelig notat",
        **kwargs,
    )


def test_create_assigns_id_and_timestamps(store):
    draft = _draft()
    booking = store.create(draft)

    assert booking.id == "booking-1"
    assert booking.created_at is not None
    assert booking.updated_at == booking.created_at
    assert draft.id is None
    assert store.get("booking-1") == booking
    assert store.get("booking-1").start < store.get("booking-1").end


def test_update_status_refreshes_updated_at(store):
    booking = store.create(_draft())
    updated = store.update_status(booking.id, BookingStatus.approved)

    assert updated.status is BookingStatus.approved
    assert updated.updated_at > booking.updated_at
    assert updated.created_at == booking.created_at
    assert store.get(booking.id).status is BookingStatus.approved


def test_update_status_unknown_id_leaves_store_untouched(store):
    store.create(_draft())
    before = store.list_admin()

    assert store.update_status("missing", BookingStatus.approved) is None
    assert store.list_admin() == before


def test_admit_check_can_refuse_a_booking(store):
    first = store.create(_draft())

    def refuse(existing):
        raise ConflictError(existing[0])

    with pytest.raises(ConflictError):
        store.create(_draft(hour=11), admit=refuse)

    assert store.list_admin() == [first]


def test_list_public_masks_requester_details(store):
    store.create(_draft(hour=8))
    approved = store.create(_draft(hour=12))
    store.update_status(approved.id, BookingStatus.approved)
    rejected = store.create(_draft(hour=16))
    store.update_status(rejected.id, BookingStatus.rejected)

    rows = store.list_public()

    assert rows == [
        {"id": "booking-1", "date": "2025-06-14", "time": "08:00", "status": "pending"},
        {"id": "booking-2", "date": "2025-06-14", "time": "12:00", "status": "booked"},
    ]
    for row in rows:
        assert not {"email", "phone", "message", "name"} & set(row)


def test_list_admin_keeps_full_detail(store):
    store.create(_draft())

    (booking,) = store.list_admin()
    assert booking.requester.email == "kari@example.com"
    assert booking.message == "Hemmelig notat"


def test_duplicate_ids_are_refused():
    class RepeatingIds:
        def new_id(self) -> str:
            return "same"

    store = MemoryBookingStore(ids=RepeatingIds())
    store.create(_draft())

    with pytest.raises(RuntimeError):
        store.create(_draft(hour=14))
    assert len(store.list_admin()) == 1
