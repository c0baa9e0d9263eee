from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any

from venue_booking.application.ports.booking_store import AdmitCheck, BookingStorePort, StatusCheck
from venue_booking.application.ports.clock import ClockPort, IdGeneratorPort
from venue_booking.application.utils.projections import is_publicly_listed, public_entry
from venue_booking.domain.entities.booking import Booking, BookingStatus
from venue_booking.infrastructure.system import SystemClock, UuidIdGenerator


class MemoryBookingStore(BookingStorePort):
    def __init__(self, clock: ClockPort | None = None, ids: IdGeneratorPort | None = None) -> None:
        self._bookings: dict[str, Booking] = {}
        self._issued_ids: set[str] = set()
        self._clock = clock or SystemClock()
        self._ids = ids or UuidIdGenerator()
        self._lock = threading.RLock()
        self._logger = logging.getLogger(__name__)

    def create(self, draft: Booking, admit: AdmitCheck | None = None) -> Booking:
        with self._lock:
            if admit is not None:
                admit(list(self._bookings.values()))
            booking_id = self._ids.new_id()
            if booking_id in self._issued_ids:
                raise RuntimeError(f"Id generator returned an id already in use: {booking_id}")
            now = self._clock.now()
            booking = replace(draft, id=booking_id, created_at=now, updated_at=now)
            self._persist([*self._bookings.values(), booking])
            self._bookings[booking_id] = booking
            self._issued_ids.add(booking_id)
        self._logger.info(
            "Booking stored", extra={"booking_id": booking_id, "status": booking.status.value}
        )
        return booking

    def get(self, booking_id: str) -> Booking | None:
        with self._lock:
            return self._bookings.get(booking_id)

    def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        check: StatusCheck | None = None,
    ) -> Booking | None:
        with self._lock:
            current = self._bookings.get(booking_id)
            if current is None:
                return None
            if check is not None:
                check(current)
            if current.status == status:
                return current
            updated = replace(current, status=status, updated_at=self._clock.now())
            self._persist([updated if b.id == booking_id else b for b in self._bookings.values()])
            self._bookings[booking_id] = updated
        self._logger.info("Booking status updated", extra={"booking_id": booking_id, "status": status.value})
        return updated

    def list_public(self) -> list[dict[str, Any]]:
        return [public_entry(b) for b in self.list_admin() if is_publicly_listed(b)]

    def list_admin(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings.values())

    def _load(self, bookings: list[Booking]) -> None:
        """Seed the collection from already stored records, assigning ids where missing."""
        with self._lock:
            for booking in bookings:
                if not booking.id or booking.id in self._issued_ids:
                    booking = replace(booking, id=self._ids.new_id())
                self._bookings[booking.id] = booking
                self._issued_ids.add(booking.id)

    def _persist(self, bookings: list[Booking]) -> None:
        """Write the prospective collection before it replaces the current one; called with the lock held."""
