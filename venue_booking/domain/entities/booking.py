from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    blocked = "blocked"
    approved = "approved"
    rejected = "rejected"


class StatusPolicy(str, Enum):
    heuristic = "heuristic"  # status fixed at creation (client-side calendar)
    board = "board"  # pending until the board approves or rejects


@dataclass(frozen=True)
class Requester:
    name: str
    email: str
    phone: str | None = None


@dataclass(frozen=True)
class Booking:
    start: datetime
    end: datetime
    requester: Requester
    status: BookingStatus = BookingStatus.pending
    id: str | None = None  # assigned by the store on create
    event_type: str | None = None
    company: str | None = None
    spaces: tuple[str, ...] = field(default_factory=tuple)
    services: tuple[str, ...] = field(default_factory=tuple)
    attendees: int | None = None
    message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600

    @property
    def date(self) -> str:
        return self.start.strftime("%Y-%m-%d")

    @property
    def time(self) -> str:
        return self.start.strftime("%H:%M")
