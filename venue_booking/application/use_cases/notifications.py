from __future__ import annotations

import logging
from dataclasses import dataclass, field

from venue_booking.application.exceptions import ConfigurationError, DeliveryError
from venue_booking.application.ports.notification_sender import NotificationSenderPort
from venue_booking.application.utils.projections import (
    board_notification,
    requester_receipt,
    status_notification,
)
from venue_booking.domain.entities.booking import Booking
from venue_booking.domain.entities.email import EmailContent, EmailMessage


@dataclass(frozen=True)
class NotificationConfig:
    from_address: str | None = None
    board_recipients: tuple[str, ...] = field(default_factory=tuple)
    cc: tuple[str, ...] = field(default_factory=tuple)
    bcc: tuple[str, ...] = field(default_factory=tuple)
    reply_to: str | None = None
    send_requester_receipt: bool = True


class BookingNotifier:
    """Builds booking emails and hands them to the sender. Delivery failures are reported, not raised."""

    def __init__(self, sender: NotificationSenderPort, config: NotificationConfig, venue_name: str) -> None:
        self._sender = sender
        self._config = config
        self._venue_name = venue_name
        self._logger = logging.getLogger(__name__)

    def require_board_config(self) -> None:
        self.require_sender_config()
        if not self._config.board_recipients:
            self._logger.error("No board recipients configured for booking notifications")
            raise ConfigurationError("Board recipient address is not configured")

    def require_sender_config(self) -> None:
        if not self._config.from_address:
            self._logger.error("No sender address configured for booking notifications")
            raise ConfigurationError("Sender address is not configured")

    def notify_board(self, booking: Booking, approve_link: str, reject_link: str) -> bool:
        content = board_notification(booking, approve_link, reject_link, self._venue_name)
        return self._deliver(
            booking,
            to=self._config.board_recipients,
            content=content,
            cc=self._config.cc,
            bcc=self._config.bcc,
            reply_to=self._config.reply_to or booking.requester.email or None,
        )

    def send_receipt(self, booking: Booking) -> bool:
        if not self._config.send_requester_receipt:
            return False
        return self._deliver(
            booking,
            to=(booking.requester.email,),
            content=requester_receipt(booking, self._venue_name),
            reply_to=self._config.reply_to,
        )

    def notify_status(self, booking: Booking) -> bool:
        return self._deliver(
            booking,
            to=(booking.requester.email,),
            content=status_notification(booking, self._venue_name),
            reply_to=self._config.reply_to,
        )

    def _deliver(
        self,
        booking: Booking,
        to: tuple[str, ...],
        content: EmailContent,
        cc: tuple[str, ...] = (),
        bcc: tuple[str, ...] = (),
        reply_to: str | None = None,
    ) -> bool:
        recipients = tuple(address for address in to if address)
        if not recipients:
            self._logger.warning(
                "Skipping email without recipient", extra={"booking_id": booking.id, "reason": content.subject}
            )
            return False
        message = EmailMessage(
            to=recipients,
            from_address=self._config.from_address or "",
            content=content,
            cc=cc,
            bcc=bcc,
            reply_to=reply_to,
        )
        try:
            self._sender.send(message)
        except DeliveryError as e:
            self._logger.error(
                "Booking email not delivered",
                extra={"booking_id": booking.id, "recipient": ", ".join(recipients), "error": str(e)},
            )
            return False
        return True
