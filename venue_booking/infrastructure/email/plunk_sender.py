from __future__ import annotations

import logging

import httpx

from venue_booking.application.exceptions import DeliveryError
from venue_booking.application.ports.notification_sender import NotificationSenderPort
from venue_booking.domain.entities.email import EmailMessage
from venue_booking.infrastructure.email.plunk_client import PlunkClient


class PlunkNotificationSender(NotificationSenderPort):
    def __init__(self, client: PlunkClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def send(self, message: EmailMessage) -> str | None:
        # Plunk delivers to each address in "to" separately, so cc/bcc ride along.
        recipients = list(dict.fromkeys([*message.to, *message.cc, *message.bcc]))
        payload = {
            "to": recipients,
            "from": message.from_address,
            "subject": message.content.subject,
            "body": message.content.html or message.content.text,
        }
        if message.reply_to:
            payload["reply"] = message.reply_to

        try:
            data = self._client.send(payload)
        except httpx.HTTPError as e:
            raise DeliveryError(f"Plunk could not deliver '{message.content.subject}': {e}") from e

        nested = data.get("data")
        message_id = (nested.get("id") if isinstance(nested, dict) else None) or data.get("id")
        self._logger.info(
            "Email sent",
            extra={"recipient": ", ".join(message.to), "reason": message.content.subject},
        )
        return str(message_id) if message_id else None
