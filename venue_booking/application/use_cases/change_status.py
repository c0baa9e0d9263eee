from __future__ import annotations

import logging
from dataclasses import dataclass

from venue_booking.application.exceptions import NotFoundError
from venue_booking.application.ports.booking_store import BookingStorePort
from venue_booking.application.use_cases.notifications import BookingNotifier
from venue_booking.application.utils.status_engine import transition
from venue_booking.domain.entities.booking import Booking, BookingStatus, StatusPolicy


@dataclass(frozen=True)
class StatusChangeResult:
    booking: Booking
    changed: bool
    requester_notified: bool


class ChangeBookingStatusUseCase:
    def __init__(self, store: BookingStorePort, notifier: BookingNotifier, policy: StatusPolicy) -> None:
        self._store = store
        self._notifier = notifier
        self._policy = policy
        self._logger = logging.getLogger(__name__)

    def approve(self, booking_id: str) -> StatusChangeResult:
        return self.execute(booking_id, BookingStatus.approved)

    def reject(self, booking_id: str) -> StatusChangeResult:
        return self.execute(booking_id, BookingStatus.rejected)

    def execute(self, booking_id: str, target: BookingStatus) -> StatusChangeResult:
        self._notifier.require_sender_config()

        previous: list[BookingStatus] = []

        def check(current: Booking) -> None:
            transition(current.status, target, self._policy)
            previous.append(current.status)

        updated = self._store.update_status(booking_id, target, check=check)
        if updated is None:
            raise NotFoundError(booking_id)

        changed = previous[0] != updated.status
        if not changed:
            self._logger.info(
                "Booking status unchanged", extra={"booking_id": booking_id, "status": target.value}
            )
            return StatusChangeResult(booking=updated, changed=False, requester_notified=False)

        notified = self._notifier.notify_status(updated)
        return StatusChangeResult(booking=updated, changed=True, requester_notified=notified)
