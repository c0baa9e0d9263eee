from __future__ import annotations

import json
import logging
from html import escape
from typing import Any
from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.concurrency import run_in_threadpool

from venue_booking.api.schemas import (
    AdminCalendarSchema,
    BookingAcceptedSchema,
    ConflictWindowSchema,
    ErrorSchema,
    PublicCalendarSchema,
)
from venue_booking.application.exceptions import (
    ConfigurationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from venue_booking.application.ports.booking_store import BookingStorePort
from venue_booking.application.use_cases.change_status import ChangeBookingStatusUseCase
from venue_booking.application.use_cases.submit_booking import SubmitBookingUseCase
from venue_booking.application.utils.projections import admin_entry, calendar_event, is_publicly_listed
from venue_booking.core.config import settings
from venue_booking.domain.entities.booking import BookingStatus
from venue_booking.wiring.dependencies import (
    get_booking_store,
    get_change_status_use_case,
    get_submit_booking_use_case,
)

router = APIRouter(prefix="/booking")
logger = logging.getLogger(__name__)

RECEIVED_MESSAGE = (
    "Din bookingforespørsel er mottatt. Du blir kontaktet av styret for endelig bekreftelse."
)
DEGRADED_MESSAGE = (
    "Bookingforespørselen er registrert, men vi kunne ikke bekrefte at e-postvarselet ble sendt."
)


def _error(status_code: int, error: ErrorSchema) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error.model_dump(exclude_none=True))


def _html_page(status_code: int, message: str) -> HTMLResponse:
    return HTMLResponse(status_code=status_code, content=f"<h2>{escape(message)}</h2>")


async def _read_body(request: Request) -> dict[str, Any]:
    body = await request.body()
    if not body:
        return {}
    text = body.decode("utf-8", errors="replace")
    content_type = request.headers.get("content-type", "").lower()

    if "application/x-www-form-urlencoded" in content_type:
        return _form_fields(text)
    try:
        data = json.loads(text)
    except ValueError:
        if "=" in text:
            return _form_fields(text)
        return {"message": text}
    return data if isinstance(data, dict) else {}


def _form_fields(text: str) -> dict[str, Any]:
    parsed = parse_qs(text, keep_blank_values=True)
    return {key: values[0] if len(values) == 1 else values for key, values in parsed.items()}


@router.post("", status_code=202, response_model=BookingAcceptedSchema)
async def submit_booking(
    request: Request,
    uc: SubmitBookingUseCase = Depends(get_submit_booking_use_case),
):
    raw = await _read_body(request)
    base_url = settings.PUBLIC_BASE_URL or str(request.base_url)

    try:
        result = await run_in_threadpool(uc.execute, raw, base_url)
    except ValidationError as e:
        logger.info("Booking request failed validation", extra={"reason": e.code})
        return _error(400, ErrorSchema(error=e.code, message=str(e), missing=e.fields or None))
    except ConflictError as e:
        conflict = e.conflicting
        return _error(
            409,
            ErrorSchema(
                error=e.code,
                message=str(e),
                conflict=ConflictWindowSchema(
                    id=conflict.id, start=conflict.start.isoformat(), end=conflict.end.isoformat()
                ),
            ),
        )
    except ConfigurationError as e:
        logger.error("Booking rejected: notification configuration missing", extra={"error": str(e)})
        return _error(
            500,
            ErrorSchema(error=e.code, message="Email configuration missing. Please contact an administrator."),
        )

    return BookingAcceptedSchema(
        id=result.booking.id,
        status=result.booking.status.value,
        notified=result.notified,
        message=RECEIVED_MESSAGE if result.notified else DEGRADED_MESSAGE,
    )


@router.get("/calendar", response_model=PublicCalendarSchema)
def public_calendar(store: BookingStorePort = Depends(get_booking_store)):
    bookings = store.list_admin()
    return {
        "bookings": store.list_public(),
        "events": [calendar_event(b) for b in bookings if is_publicly_listed(b)],
    }


@router.get("/admin", response_model=AdminCalendarSchema)
@router.get("/admin/calendar", response_model=AdminCalendarSchema)
def admin_calendar(store: BookingStorePort = Depends(get_booking_store)):
    bookings = store.list_admin()
    return {
        "bookings": [admin_entry(b) for b in bookings],
        "events": [calendar_event(b, admin=True) for b in bookings],
    }


@router.get("/approve", response_class=HTMLResponse)
def approve_booking(
    booking_id: str | None = Query(None, alias="id"),
    uc: ChangeBookingStatusUseCase = Depends(get_change_status_use_case),
):
    return _change_status(uc, booking_id, BookingStatus.approved)


@router.get("/reject", response_class=HTMLResponse)
def reject_booking(
    booking_id: str | None = Query(None, alias="id"),
    uc: ChangeBookingStatusUseCase = Depends(get_change_status_use_case),
):
    return _change_status(uc, booking_id, BookingStatus.rejected)


def _change_status(uc: ChangeBookingStatusUseCase, booking_id: str | None, target: BookingStatus) -> HTMLResponse:
    if not booking_id or not booking_id.strip():
        return _html_page(400, "Mangler booking-ID.")

    try:
        result = uc.execute(booking_id.strip(), target)
    except NotFoundError:
        return _html_page(404, "Fant ikke booking.")
    except InvalidTransitionError as e:
        logger.info("Status change refused", extra={"booking_id": booking_id, "reason": str(e)})
        return _html_page(409, "Bookingen er allerede behandlet og kan ikke endres.")
    except ConfigurationError as e:
        logger.error("Status change refused: email configuration missing", extra={"error": str(e)})
        return _html_page(500, "E-postoppsettet mangler. Kontakt en administrator.")

    if target is BookingStatus.approved:
        message = "Bookingen er godkjent."
        follow_up = " Bekreftelse er sendt til forespørrer." if result.requester_notified else ""
    else:
        message = "Bookingen er avvist."
        follow_up = " Forespørrer er varslet." if result.requester_notified else ""
    if not result.changed:
        follow_up = " Ingen endring ble gjort."
    elif not result.requester_notified:
        follow_up = " Varsel til forespørrer kunne ikke sendes."
    return _html_page(200, message + follow_up)
