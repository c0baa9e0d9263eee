from __future__ import annotations

import logging

from venue_booking.application.ports.notification_sender import NotificationSenderPort
from venue_booking.domain.entities.email import EmailMessage


class MockNotificationSender(NotificationSenderPort):
    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self._logger = logging.getLogger(__name__)

    def send(self, message: EmailMessage) -> str | None:
        self.sent.append(message)
        self._logger.info(
            "Mock email send",
            extra={"recipient": ", ".join(message.to), "reason": message.content.subject},
        )
        return f"mock_message_{len(self.sent)}"
