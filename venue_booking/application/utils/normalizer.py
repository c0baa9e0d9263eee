from __future__ import annotations

import logging
from typing import Any, Mapping

from venue_booking.application.utils.fields import (
    add_hours,
    combine_date_time,
    field_value,
    flatten_record,
    list_field,
    parse_hours,
    parse_instant,
    parse_non_negative_int,
    raw_value,
)
from venue_booking.application.utils.status_engine import compute_status
from venue_booking.domain.entities.booking import Booking, Requester
from venue_booking.domain.entities.booking_rules import BookingRules

logger = logging.getLogger(__name__)


def normalise(record: Mapping[str, Any], rules: BookingRules | None = None) -> Booking | None:
    """
    Coerce a loosely shaped booking record into a Booking.
    Returns None when no valid start instant can be derived; callers drop such records.
    """
    rules = rules or BookingRules()
    flat = flatten_record(record)
    tz = rules.timezone

    start = parse_instant(raw_value(flat, "start"), tz)
    if start is None:
        start = combine_date_time(field_value(flat, "date"), field_value(flat, "time"), tz)
    if start is None:
        return None

    end = parse_instant(raw_value(flat, "end"), tz)
    if end is None:
        hours = parse_hours(raw_value(flat, "duration")) or rules.default_duration_hours
        end = add_hours(start, hours)
        if end is None:
            logger.debug("Dropping booking record with out-of-range window", extra={"reason": "window_overflow"})
            return None
    if end <= start:
        logger.debug("Dropping booking record with empty window", extra={"reason": "end_before_start"})
        return None

    name = field_value(flat, "name")
    if not name:
        name = " ".join(
            part for part in (field_value(flat, "first_name"), field_value(flat, "last_name")) if part
        )

    spaces = list_field(flat, "spaces")
    status = compute_status(
        spaces,
        (end - start).total_seconds() / 3600,
        explicit=raw_value(flat, "status"),
        policy=rules.policy,
        entire_venue=rules.entire_venue,
        auto_confirm_hours=rules.auto_confirm_hours,
    )

    return Booking(
        id=field_value(flat, "id") or None,
        start=start,
        end=end,
        requester=Requester(
            name=name,
            email=field_value(flat, "email"),
            phone=field_value(flat, "phone") or None,
        ),
        status=status,
        event_type=field_value(flat, "event_type") or None,
        company=field_value(flat, "company") or None,
        spaces=spaces,
        services=list_field(flat, "services"),
        attendees=parse_non_negative_int(raw_value(flat, "attendees")),
        message=field_value(flat, "message") or None,
        created_at=parse_instant(raw_value(flat, "created_at"), tz),
        updated_at=parse_instant(raw_value(flat, "updated_at"), tz),
    )


def to_record(booking: Booking) -> dict[str, Any]:
    """Canonical serialisable mapping; normalise(to_record(b)) reproduces b."""
    return {
        "id": booking.id,
        "start": booking.start.isoformat(),
        "end": booking.end.isoformat(),
        "date": booking.date,
        "time": booking.time,
        "duration": booking.duration_hours,
        "name": booking.requester.name,
        "email": booking.requester.email,
        "phone": booking.requester.phone,
        "company": booking.company,
        "eventType": booking.event_type,
        "spaces": list(booking.spaces),
        "services": list(booking.services),
        "attendees": booking.attendees,
        "message": booking.message,
        "status": booking.status.value,
        "createdAt": booking.created_at.isoformat() if booking.created_at else None,
        "updatedAt": booking.updated_at.isoformat() if booking.updated_at else None,
    }
