from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from venue_booking.application.utils.fields import parse_instant, parse_list_value
from venue_booking.application.utils.status_engine import ENTIRE_VENUE_SPACES, is_entire_venue
from venue_booking.domain.entities.booking import Booking, BookingStatus

# Bookings in these states never hold the slot.
NON_BLOCKING_STATUSES = frozenset({BookingStatus.rejected})


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open [start, end) overlap: touching edges do not overlap."""
    return start_a < end_b and end_a > start_b


def spaces_overlap(
    first: Iterable[str],
    second: Iterable[str],
    entire_venue: Iterable[str] = ENTIRE_VENUE_SPACES,
) -> bool:
    """
    An empty selection or an entire-venue space claims every room,
    otherwise the two selections must share at least one space.
    """
    first_set = {space.strip().lower() for space in first}
    second_set = {space.strip().lower() for space in second}
    if not first_set or not second_set:
        return True
    if is_entire_venue(first_set, entire_venue) or is_entire_venue(second_set, entire_venue):
        return True
    return not first_set.isdisjoint(second_set)


def find_conflict(
    start: datetime,
    end: datetime,
    existing: Iterable[Booking | Mapping[str, Any]],
    spaces: Iterable[str] | None = None,
    require_space_overlap: bool = True,
    entire_venue: Iterable[str] = ENTIRE_VENUE_SPACES,
) -> Booking | Mapping[str, Any] | None:
    """
    Return the first existing booking (in iteration order) whose window overlaps
    [start, end) and, when ``require_space_overlap`` is set, whose spaces
    intersect ``spaces``. Entries with an unreadable window are skipped.
    """
    requested = tuple(spaces or ())
    for item in existing:
        window = _window(item)
        if window is None:
            continue
        item_start, item_end, item_spaces, item_status = window
        if item_status in NON_BLOCKING_STATUSES:
            continue
        if not overlaps(start, end, item_start, item_end):
            continue
        if require_space_overlap and not spaces_overlap(requested, item_spaces, entire_venue):
            continue
        return item
    return None


def _window(
    item: Booking | Mapping[str, Any],
) -> tuple[datetime, datetime, tuple[str, ...], BookingStatus | None] | None:
    if isinstance(item, Booking):
        start, end, spaces, status = item.start, item.end, item.spaces, item.status
    elif isinstance(item, Mapping):
        start = parse_instant(item.get("start"), timezone.utc)
        end = parse_instant(item.get("end"), timezone.utc)
        spaces = parse_list_value([item.get("spaces"), item.get("space")])
        try:
            status = BookingStatus(str(item.get("status") or "").strip().lower())
        except ValueError:
            status = None
    else:
        return None
    if start is None or end is None or end <= start:
        return None
    return start, end, spaces, status
