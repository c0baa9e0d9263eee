from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from venue_booking.application.ports.clock import ClockPort, IdGeneratorPort
from venue_booking.application.utils.normalizer import normalise, to_record
from venue_booking.domain.entities.booking import Booking
from venue_booking.domain.entities.booking_rules import BookingRules
from venue_booking.infrastructure.store.memory_store import MemoryBookingStore


class JsonBookingStore(MemoryBookingStore):
    """
    Keeps every booking in one JSON array on disk.
    The file is read once on start-up and rewritten after every change.
    """

    def __init__(
        self,
        path: str = "./data/bookings.json",
        rules: BookingRules | None = None,
        clock: ClockPort | None = None,
        ids: IdGeneratorPort | None = None,
    ) -> None:
        super().__init__(clock=clock, ids=ids)
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._rules = rules or BookingRules()
        self._load(self._read_bookings())

    def _read_bookings(self) -> list[Booking]:
        records = self._read_records()
        bookings: list[Booking] = []
        dropped = 0
        for record in records:
            booking = normalise(record, self._rules) if isinstance(record, dict) else None
            if booking is None:
                dropped += 1
                continue
            bookings.append(booking)
        if dropped:
            self._logger.warning(
                "Dropped unreadable booking records", extra={"reason": f"{dropped} malformed"}
            )
        return bookings

    def _read_records(self) -> list[Any]:
        if not self._path.exists():
            return []
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self._logger.error("Could not read booking file", extra={"error": str(e)})
            return []
        if isinstance(data, dict):
            data = data.get("bookings", [])
        return data if isinstance(data, list) else []

    def _persist(self, bookings: list[Booking]) -> None:
        temp_path = self._path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump([to_record(b) for b in bookings], f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except OSError:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise
