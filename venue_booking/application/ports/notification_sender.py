from abc import ABC, abstractmethod

from venue_booking.domain.entities.email import EmailMessage


class NotificationSenderPort(ABC):
    @abstractmethod
    def send(self, message: EmailMessage) -> str | None:
        """Deliver a message. Returns the provider message id when known. Raises DeliveryError."""
        raise NotImplementedError
