from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from venue_booking.domain.entities.booking import Booking, BookingStatus

AdmitCheck = Callable[[list[Booking]], None]
StatusCheck = Callable[[Booking], None]


class BookingStorePort(ABC):
    @abstractmethod
    def create(self, draft: Booking, admit: AdmitCheck | None = None) -> Booking:
        """
        Store a new booking and return the stored record.
        ``admit`` receives the current bookings while the store is locked;
        if it raises, nothing is stored.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        check: StatusCheck | None = None,
    ) -> Booking | None:
        """
        Set the status of a booking. Returns None for an unknown id.
        ``check`` runs against the current record before the change.
        """
        raise NotImplementedError

    @abstractmethod
    def list_public(self) -> list[dict[str, Any]]:
        """Masked rows: id, date, time and a coarse status."""
        raise NotImplementedError

    @abstractmethod
    def list_admin(self) -> list[Booking]:
        raise NotImplementedError
