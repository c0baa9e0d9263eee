from __future__ import annotations

import uuid
from datetime import datetime
from zoneinfo import ZoneInfo

from venue_booking.application.ports.clock import ClockPort, IdGeneratorPort


class SystemClock(ClockPort):
    def __init__(self, timezone: ZoneInfo | None = None) -> None:
        self._timezone = timezone or ZoneInfo("UTC")

    def now(self) -> datetime:
        return datetime.now(self._timezone)


class UuidIdGenerator(IdGeneratorPort):
    def new_id(self) -> str:
        return str(uuid.uuid4())
