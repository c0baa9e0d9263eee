from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class BookingAcceptedSchema(BaseModel):
    id: str
    status: str
    notified: bool
    message: str


class ConflictWindowSchema(BaseModel):
    id: str | None = None
    start: str
    end: str


class ErrorSchema(BaseModel):
    error: str
    message: str
    missing: list[str] | None = None
    conflict: ConflictWindowSchema | None = None


class PublicBookingSchema(BaseModel):
    id: str | None
    date: str
    time: str
    status: str


class CalendarEventSchema(BaseModel):
    id: str | None
    title: str
    start: str
    end: str
    classNames: list[str] = Field(default_factory=list)


class PublicCalendarSchema(BaseModel):
    bookings: list[PublicBookingSchema]
    events: list[CalendarEventSchema]


class AdminCalendarSchema(BaseModel):
    bookings: list[dict[str, Any]]
    events: list[CalendarEventSchema]
