from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from venue_booking.domain.entities.booking import Booking


class BookingError(Exception):
    """Base class for failures the booking core reports to callers."""

    code = "BookingError"


class ValidationError(BookingError, ValueError):
    """Raised when a request is missing fields or carries invalid values."""

    code = "ValidationError"

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])


class MissingFieldsError(ValidationError):
    code = "MissingFields"


class InvalidDateTimeError(ValidationError):
    code = "InvalidDateTime"


class InvalidDurationError(ValidationError):
    code = "InvalidDuration"


class InvalidAttendeesError(ValidationError):
    code = "InvalidAttendees"


class NoSpaceSelectedError(ValidationError):
    code = "NoSpaceSelected"


class ConflictError(BookingError):
    """Raised when the requested window overlaps an existing booking."""

    code = "Conflict"

    def __init__(self, conflicting: Booking) -> None:
        super().__init__(
            f"Requested time overlaps booking {conflicting.id} "
            f"({conflicting.start.isoformat()} - {conflicting.end.isoformat()})"
        )
        self.conflicting = conflicting


class ConfigurationError(BookingError, RuntimeError):
    """Raised when sender or recipient configuration is absent."""

    code = "ConfigurationError"


class DeliveryError(BookingError, RuntimeError):
    """Raised when the notification transport fails to deliver a message."""

    code = "DeliveryError"


class NotFoundError(BookingError, LookupError):
    code = "NotFound"

    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking {booking_id} not found")
        self.booking_id = booking_id


class InvalidTransitionError(BookingError):
    code = "InvalidTransition"
