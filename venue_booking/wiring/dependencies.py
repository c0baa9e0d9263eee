from __future__ import annotations

import logging
from functools import lru_cache
from zoneinfo import ZoneInfo

from venue_booking.application.exceptions import ConfigurationError
from venue_booking.application.ports.booking_store import BookingStorePort
from venue_booking.application.ports.notification_sender import NotificationSenderPort
from venue_booking.application.use_cases.change_status import ChangeBookingStatusUseCase
from venue_booking.application.use_cases.notifications import BookingNotifier, NotificationConfig
from venue_booking.application.use_cases.submit_booking import SubmitBookingUseCase
from venue_booking.application.utils.fields import parse_list_value
from venue_booking.application.utils.validator import FormVariant
from venue_booking.core.config import settings
from venue_booking.domain.entities.booking import StatusPolicy
from venue_booking.domain.entities.booking_rules import BookingRules
from venue_booking.infrastructure.email.mock_sender import MockNotificationSender
from venue_booking.infrastructure.email.plunk_client import PlunkClient
from venue_booking.infrastructure.email.plunk_sender import PlunkNotificationSender
from venue_booking.infrastructure.store.json_store import JsonBookingStore
from venue_booking.infrastructure.store.memory_store import MemoryBookingStore
from venue_booking.infrastructure.system import SystemClock


_booking_store: BookingStorePort | None = None


@lru_cache
def get_booking_rules() -> BookingRules:
    return BookingRules(
        timezone=ZoneInfo(settings.VENUE_TIMEZONE),
        policy=StatusPolicy(settings.STATUS_POLICY.lower()),
        entire_venue=frozenset(s.lower() for s in parse_list_value(settings.ENTIRE_VENUE_SPACES)),
        auto_confirm_hours=settings.AUTO_CONFIRM_HOURS,
        default_duration_hours=settings.DEFAULT_DURATION_HOURS,
        max_duration_hours=settings.MAX_DURATION_HOURS,
        require_space_overlap=settings.CONFLICT_REQUIRES_SPACE_OVERLAP,
    )


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        rules = get_booking_rules()
        clock = SystemClock(rules.timezone)
        if settings.STORE_PROVIDER.lower() == "json":
            _booking_store = JsonBookingStore(path=settings.BOOKING_STORE_PATH, rules=rules, clock=clock)
        else:
            _booking_store = MemoryBookingStore(clock=clock)
    return _booking_store


@lru_cache
def get_notification_sender() -> NotificationSenderPort:
    logger = logging.getLogger(__name__)
    if settings.EMAIL_PROVIDER.lower() == "plunk" or settings.PLUNK_API_TOKEN:
        if settings.PLUNK_API_TOKEN:
            logger.info("Using Plunk email transport")
            client = PlunkClient(api_token=settings.PLUNK_API_TOKEN, send_endpoint=settings.PLUNK_API_URL)
            return PlunkNotificationSender(client=client)
        if settings.ENV.lower() not in {"dev", "local"}:
            raise ConfigurationError("PLUNK_API_TOKEN is required to send booking emails.")
    logger.info("Using MockNotificationSender (ENV=%s)", settings.ENV)
    return MockNotificationSender()


def get_notification_config() -> NotificationConfig:
    return NotificationConfig(
        from_address=(settings.DEFAULT_FROM_ADDRESS or "").strip() or None,
        board_recipients=parse_list_value(settings.BOARD_TO_ADDRESS),
        cc=parse_list_value(settings.BOOKING_CC),
        bcc=parse_list_value(settings.BOOKING_BCC),
        reply_to=(settings.BOOKING_REPLY_TO or "").strip() or None,
        send_requester_receipt=settings.SEND_REQUESTER_RECEIPT,
    )


def get_booking_notifier() -> BookingNotifier:
    return BookingNotifier(
        sender=get_notification_sender(),
        config=get_notification_config(),
        venue_name=settings.VENUE_NAME,
    )


def get_submit_booking_use_case() -> SubmitBookingUseCase:
    return SubmitBookingUseCase(
        store=get_booking_store(),
        notifier=get_booking_notifier(),
        rules=get_booking_rules(),
        variant=FormVariant(settings.FORM_VARIANT.lower()),
    )


def get_change_status_use_case() -> ChangeBookingStatusUseCase:
    return ChangeBookingStatusUseCase(
        store=get_booking_store(),
        notifier=get_booking_notifier(),
        policy=get_booking_rules().policy,
    )
