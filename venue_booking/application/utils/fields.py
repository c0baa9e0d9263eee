from __future__ import annotations

import math
from datetime import datetime, timedelta, tzinfo
from typing import Any, Iterable, Mapping

# Canonical field -> accepted inbound spellings, in priority order.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "bookingId"),
    "name": ("name", "requesterName", "fullName", "navn"),
    "first_name": ("firstName", "firstname", "fornavn"),
    "last_name": ("lastName", "lastname", "etternavn"),
    "email": ("email", "requesterEmail", "emailAddress", "epost"),
    "phone": ("phone", "phoneNumber", "telefon"),
    "company": ("company", "organisation", "organization"),
    "event_type": ("eventType", "event_type", "arrangement", "eventName", "event"),
    "date": ("date", "preferredDate"),
    "time": ("time", "preferredTime"),
    "start": ("start", "startTime"),
    "end": ("end", "endTime"),
    "duration": ("duration", "durationHours", "hours"),
    "spaces": ("spaces", "space"),
    "services": ("services", "service"),
    "attendees": ("attendees", "attendeeCount", "participants"),
    "message": ("message", "notes"),
    "status": ("status",),
    "created_at": ("createdAt", "created_at"),
    "updated_at": ("updatedAt", "updated_at"),
}

# Calendar-widget events keep the request details under this key.
NESTED_DETAILS_KEY = "extendedProps"


def flatten_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Merge nested calendar details into the top level; top-level keys win."""
    nested = record.get(NESTED_DETAILS_KEY)
    flat = dict(nested) if isinstance(nested, Mapping) else {}
    for key, value in record.items():
        if key == NESTED_DETAILS_KEY:
            continue
        if value in (None, "") and key in flat:
            continue
        flat[key] = value
    return flat


def pick_string(*candidates: Any) -> str:
    for candidate in candidates:
        if candidate is None:
            continue
        if isinstance(candidate, (list, tuple)):
            value = pick_string(*candidate)
            if value:
                return value
            continue
        if isinstance(candidate, bool):
            return "true" if candidate else "false"
        if isinstance(candidate, (int, float)):
            return str(candidate)
        if isinstance(candidate, str):
            trimmed = candidate.strip()
            if trimmed:
                return trimmed
    return ""


def field_value(record: Mapping[str, Any], field_name: str) -> str:
    """First non-empty value among the aliases of ``field_name``."""
    return pick_string(*(record.get(alias) for alias in FIELD_ALIASES[field_name]))


def raw_value(record: Mapping[str, Any], field_name: str) -> Any:
    for alias in FIELD_ALIASES[field_name]:
        value = record.get(alias)
        if value not in (None, ""):
            return value
    return None


def parse_list_value(value: Any) -> tuple[str, ...]:
    """Comma-split, trim, drop empties and de-duplicate, keeping first-seen order."""
    seen: dict[str, None] = {}
    for entry in _iter_list_entries(value):
        seen.setdefault(entry, None)
    return tuple(seen)


def _iter_list_entries(value: Any) -> Iterable[str]:
    if value is None:
        return
    if isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            yield from _iter_list_entries(item)
        return
    if isinstance(value, str):
        for part in value.split(","):
            part = part.strip()
            if part:
                yield part
        return
    text = str(value).strip()
    if text:
        yield text


def list_field(record: Mapping[str, Any], field_name: str) -> tuple[str, ...]:
    return parse_list_value([record.get(alias) for alias in FIELD_ALIASES[field_name]])


def parse_hours(value: Any) -> float | None:
    """Parse a duration in hours. Returns None unless finite and positive."""
    if value is None or isinstance(value, bool):
        return None
    try:
        hours = float(str(value).strip().replace(",", "."))
    except ValueError:
        return None
    if not math.isfinite(hours) or hours <= 0:
        return None
    return hours


def parse_non_negative_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None
    return number if number >= 0 else None


def parse_instant(value: Any, timezone: tzinfo) -> datetime | None:
    """Parse an ISO timestamp; naive values are read in ``timezone``."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    return _in_timezone(parsed, timezone)


def combine_date_time(date_text: str, time_text: str, timezone: tzinfo) -> datetime | None:
    if not date_text or not time_text:
        return None
    if "T" in date_text:
        date_text = date_text.split("T", 1)[0]
    try:
        parsed = datetime.fromisoformat(f"{date_text.strip()}T{time_text.strip()}")
    except ValueError:
        return None
    return _in_timezone(parsed, timezone)


def _in_timezone(parsed: datetime, timezone: tzinfo) -> datetime | None:
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone)
    try:
        return parsed.astimezone(timezone)
    except (OverflowError, ValueError):
        # Instants at the edge of the datetime range cannot be shifted.
        return None


def add_hours(start: datetime, hours: float) -> datetime | None:
    """``start`` plus ``hours``, or None when the result leaves the datetime range."""
    try:
        return start + timedelta(hours=hours)
    except (OverflowError, ValueError):
        return None
