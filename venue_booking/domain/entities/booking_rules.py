from __future__ import annotations

from dataclasses import dataclass, field
from zoneinfo import ZoneInfo

from venue_booking.domain.entities.booking import StatusPolicy


@dataclass(frozen=True)
class BookingRules:
    """Per-deployment knobs shared by the normaliser, status engine and conflict check."""

    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo("Europe/Oslo"))
    policy: StatusPolicy = StatusPolicy.board
    entire_venue: frozenset[str] = frozenset({"hele lokalet"})
    auto_confirm_hours: float = 8.0
    default_duration_hours: float = 4.0
    max_duration_hours: float = 168.0
    require_space_overlap: bool = True
