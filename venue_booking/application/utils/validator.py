from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from enum import Enum
from typing import Any, Mapping
from zoneinfo import ZoneInfo

from venue_booking.application.exceptions import (
    InvalidAttendeesError,
    InvalidDateTimeError,
    InvalidDurationError,
    MissingFieldsError,
    NoSpaceSelectedError,
)
from venue_booking.application.utils.fields import (
    FIELD_ALIASES,
    add_hours,
    combine_date_time,
    field_value,
    flatten_record,
    list_field,
    parse_hours,
    parse_non_negative_int,
)


class FormVariant(str, Enum):
    basic = "basic"  # name, email, date, time, duration
    detailed = "detailed"  # adds phone, event type and at least one space


REQUIRED_FIELDS: dict[FormVariant, tuple[str, ...]] = {
    FormVariant.basic: ("name", "email", "date", "time", "duration"),
    FormVariant.detailed: ("name", "email", "phone", "event_type", "date", "time", "duration"),
}


@dataclass(frozen=True)
class ValidatedFields:
    name: str
    email: str
    date: str
    time: str
    start: datetime
    duration_hours: float
    phone: str | None = None
    event_type: str | None = None
    company: str | None = None
    spaces: tuple[str, ...] = ()
    services: tuple[str, ...] = ()
    attendees: int | None = None
    message: str | None = None

    def to_record(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "company": self.company,
            "eventType": self.event_type,
            "start": self.start.isoformat(),
            "duration": self.duration_hours,
            "spaces": list(self.spaces),
            "services": list(self.services),
            "attendees": self.attendees,
            "message": self.message,
        }


def validate(
    raw: Mapping[str, Any],
    variant: FormVariant = FormVariant.basic,
    timezone: tzinfo | None = None,
    max_duration_hours: float | None = None,
) -> ValidatedFields:
    """
    Check a raw booking request. Raises a ValidationError subclass on the first failing rule.
    ``max_duration_hours`` caps the requested window; None leaves it unbounded.
    """
    tz = timezone or ZoneInfo("Europe/Oslo")
    flat = flatten_record(raw)

    values = {name: field_value(flat, name) for name in FIELD_ALIASES}
    if not values["name"]:
        values["name"] = " ".join(p for p in (values["first_name"], values["last_name"]) if p)

    missing = [name for name in REQUIRED_FIELDS[variant] if not values[name]]
    if missing:
        raise MissingFieldsError(
            "Missing required fields: " + ", ".join(_display_name(n) for n in missing),
            fields=[_display_name(n) for n in missing],
        )

    start = combine_date_time(values["date"], values["time"], tz)
    if start is None:
        raise InvalidDateTimeError(
            f"Invalid date or time: {values['date']} {values['time']}", fields=["date", "time"]
        )

    duration = parse_hours(values["duration"])
    if duration is None:
        raise InvalidDurationError(
            f"Duration must be a positive number of hours, got '{values['duration']}'",
            fields=["duration"],
        )
    if max_duration_hours is not None and duration > max_duration_hours:
        raise InvalidDurationError(
            f"Duration may not exceed {max_duration_hours:g} hours, got '{values['duration']}'",
            fields=["duration"],
        )
    end = add_hours(start, duration)
    if end is None or end <= start:
        raise InvalidDurationError(
            f"Duration '{values['duration']}' does not give a usable booking window",
            fields=["duration"],
        )

    attendees = None
    if values["attendees"]:
        attendees = parse_non_negative_int(values["attendees"])
        if attendees is None:
            raise InvalidAttendeesError(
                f"Attendees must be a whole number of people, got '{values['attendees']}'",
                fields=["attendees"],
            )

    spaces = list_field(flat, "spaces")
    if variant is FormVariant.detailed and not spaces:
        raise NoSpaceSelectedError("Select at least one space", fields=["spaces"])

    return ValidatedFields(
        name=values["name"],
        email=values["email"],
        date=values["date"],
        time=values["time"],
        start=start,
        duration_hours=duration,
        phone=values["phone"] or None,
        event_type=values["event_type"] or None,
        company=values["company"] or None,
        spaces=spaces,
        services=list_field(flat, "services"),
        attendees=attendees,
        message=values["message"] or None,
    )


def _display_name(field_name: str) -> str:
    return FIELD_ALIASES[field_name][0] if field_name in FIELD_ALIASES else field_name
