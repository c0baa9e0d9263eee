from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from venue_booking.application.exceptions import ConflictError, InvalidDateTimeError
from venue_booking.application.ports.booking_store import BookingStorePort
from venue_booking.application.use_cases.notifications import BookingNotifier
from venue_booking.application.utils.conflicts import find_conflict
from venue_booking.application.utils.normalizer import normalise
from venue_booking.application.utils.validator import FormVariant, validate
from venue_booking.domain.entities.booking import Booking
from venue_booking.domain.entities.booking_rules import BookingRules


@dataclass(frozen=True)
class SubmissionResult:
    booking: Booking
    board_notified: bool
    receipt_sent: bool

    @property
    def notified(self) -> bool:
        return self.board_notified


class SubmitBookingUseCase:
    def __init__(
        self,
        store: BookingStorePort,
        notifier: BookingNotifier,
        rules: BookingRules,
        variant: FormVariant = FormVariant.basic,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._rules = rules
        self._variant = variant
        self._logger = logging.getLogger(__name__)

    def execute(self, raw: Mapping[str, Any], action_base_url: str) -> SubmissionResult:
        """
        Admit a booking request: validate, normalise, check for conflicts and store it,
        then notify the board and the requester.
        Raises ValidationError, ConflictError or ConfigurationError before any change is made.
        """
        fields = validate(raw, self._variant, self._rules.timezone, self._rules.max_duration_hours)
        self._notifier.require_board_config()

        draft = normalise(fields.to_record(), self._rules)
        if draft is None:
            raise InvalidDateTimeError("Could not derive a booking window", fields=["date", "time"])

        booking = self._store.create(draft, admit=lambda existing: self._admit(draft, existing))
        self._logger.info(
            "Booking admitted", extra={"booking_id": booking.id, "status": booking.status.value}
        )

        base = action_base_url.rstrip("/")
        board_notified = self._notifier.notify_board(
            booking,
            approve_link=f"{base}/booking/approve?id={booking.id}",
            reject_link=f"{base}/booking/reject?id={booking.id}",
        )
        receipt_sent = self._notifier.send_receipt(booking)
        return SubmissionResult(booking=booking, board_notified=board_notified, receipt_sent=receipt_sent)

    def _admit(self, draft: Booking, existing: list[Booking]) -> None:
        conflict = find_conflict(
            draft.start,
            draft.end,
            existing,
            spaces=draft.spaces,
            require_space_overlap=self._rules.require_space_overlap,
            entire_venue=self._rules.entire_venue,
        )
        if conflict is not None:
            self._logger.info(
                "Booking request rejected by conflict check",
                extra={"booking_id": conflict.id, "reason": "conflict"},
            )
            raise ConflictError(conflict)
