"""
Shared fixtures for the booking tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from venue_booking.application.ports.clock import ClockPort, IdGeneratorPort
from venue_booking.application.use_cases.change_status import ChangeBookingStatusUseCase
from venue_booking.application.use_cases.notifications import BookingNotifier, NotificationConfig
from venue_booking.application.use_cases.submit_booking import SubmitBookingUseCase
from venue_booking.domain.entities.booking import StatusPolicy
from venue_booking.domain.entities.booking_rules import BookingRules
from venue_booking.infrastructure.email.mock_sender import MockNotificationSender
from venue_booking.infrastructure.store.memory_store import MemoryBookingStore

OSLO = ZoneInfo("Europe/Oslo")


class FixedClock(ClockPort):
    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(minutes=1)) -> None:
        self._current = start or datetime(2025, 5, 1, 8, 0, tzinfo=OSLO)
        self._step = step

    def now(self) -> datetime:
        value = self._current
        self._current += self._step
        return value


class SequenceIds(IdGeneratorPort):
    def __init__(self, prefix: str = "booking") -> None:
        self._count = 0
        self._prefix = prefix

    def new_id(self) -> str:
        self._count += 1
        return f"{self._prefix}-{self._count}"


@pytest.fixture
def rules() -> BookingRules:
    return BookingRules(timezone=OSLO, policy=StatusPolicy.board)


@pytest.fixture
def heuristic_rules() -> BookingRules:
    return BookingRules(timezone=OSLO, policy=StatusPolicy.heuristic)


@pytest.fixture
def store() -> MemoryBookingStore:
    return MemoryBookingStore(clock=FixedClock(), ids=SequenceIds())


@pytest.fixture
def sender() -> MockNotificationSender:
    return MockNotificationSender()


@pytest.fixture
def notification_config() -> NotificationConfig:
    return NotificationConfig(
        from_address="booking@bjorkvang.no",
        board_recipients=("styret@bjorkvang.no",),
    )


@pytest.fixture
def notifier(sender, notification_config) -> BookingNotifier:
    return BookingNotifier(sender=sender, config=notification_config, venue_name="Bjørkvang")


@pytest.fixture
def submit(store, notifier, rules) -> SubmitBookingUseCase:
    return SubmitBookingUseCase(store=store, notifier=notifier, rules=rules)


@pytest.fixture
def change_status(store, notifier, rules) -> ChangeBookingStatusUseCase:
    return ChangeBookingStatusUseCase(store=store, notifier=notifier, policy=rules.policy)


@pytest.fixture
def booking_request() -> dict:
    """A valid request from the basic booking form."""
    return {
        "name": "Kari Nordmann",
        "email": "kari@example.com",
        "phone": "99887766",
        "date": "2025-06-14",
        "time": "10:00",
        "duration": "2",
        "eventType": "Bursdag",
        "spaces": "Salen, Kjøkkenet",
        "message": "Trenger tilgang fra 09:30.",
    }


@pytest.fixture
def make_ids():
    return SequenceIds


@pytest.fixture
def make_clock():
    return FixedClock
