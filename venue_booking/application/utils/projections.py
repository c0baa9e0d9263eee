from __future__ import annotations

from html import escape
from typing import Any

from venue_booking.domain.entities.booking import Booking, BookingStatus
from venue_booking.domain.entities.email import EmailContent

NOT_GIVEN = "Ikke oppgitt"

PUBLIC_STATUS = {
    BookingStatus.pending: "pending",
    BookingStatus.blocked: "blocked",
}

PUBLIC_TITLES = {
    "pending": "Venter på godkjenning",
    "blocked": "Blokkert",
    "booked": "Reservert",
}


def public_status(status: BookingStatus) -> str:
    return PUBLIC_STATUS.get(status, "booked")


def is_publicly_listed(booking: Booking) -> bool:
    return booking.status is not BookingStatus.rejected


def public_entry(booking: Booking) -> dict[str, Any]:
    return {
        "id": booking.id,
        "date": booking.date,
        "time": booking.time,
        "status": public_status(booking.status),
    }


def admin_entry(booking: Booking) -> dict[str, Any]:
    return {
        "id": booking.id,
        "date": booking.date,
        "time": booking.time,
        "start": booking.start.isoformat(),
        "end": booking.end.isoformat(),
        "duration": booking.duration_hours,
        "name": booking.requester.name,
        "email": booking.requester.email,
        "phone": booking.requester.phone,
        "company": booking.company,
        "eventType": booking.event_type,
        "spaces": list(booking.spaces),
        "services": list(booking.services),
        "attendees": booking.attendees,
        "message": booking.message,
        "status": booking.status.value,
        "createdAt": booking.created_at.isoformat() if booking.created_at else None,
        "updatedAt": booking.updated_at.isoformat() if booking.updated_at else None,
    }


def calendar_event(booking: Booking, admin: bool = False) -> dict[str, Any]:
    if admin:
        label = booking.event_type or "Booking"
        title = f"{label}: {booking.requester.name}" if booking.requester.name else label
        css_status = booking.status.value
    else:
        css_status = public_status(booking.status)
        title = PUBLIC_TITLES[css_status]
    return {
        "id": booking.id,
        "title": title,
        "start": booking.start.isoformat(),
        "end": booking.end.isoformat(),
        "classNames": [f"booking-{css_status}"],
    }


def _text(value: Any, fallback: str = NOT_GIVEN) -> str:
    if isinstance(value, (list, tuple)):
        joined = ", ".join(str(v).strip() for v in value if str(v).strip())
        return joined or fallback
    if value is None:
        return fallback
    text = str(value).strip()
    return text or fallback


def _html(value: Any, fallback: str = NOT_GIVEN) -> str:
    return escape(_text(value, fallback)).replace("\n", "<br>")


def _format_hours(hours: float) -> str:
    return f"{hours:g}"


def _detail_rows(booking: Booking) -> list[tuple[str, Any, str]]:
    return [
        ("Navn", booking.requester.name, NOT_GIVEN),
        ("E-post", booking.requester.email, NOT_GIVEN),
        ("Telefon", booking.requester.phone, NOT_GIVEN),
        ("Selskap eller organisasjon", booking.company, NOT_GIVEN),
        ("Arrangementstype", booking.event_type, NOT_GIVEN),
        ("Dato", booking.date, NOT_GIVEN),
        ("Starttid", booking.time, NOT_GIVEN),
        ("Varighet (timer)", _format_hours(booking.duration_hours), NOT_GIVEN),
        ("Ønskede rom", booking.spaces, "Ingen"),
        ("Tilleggsbehov", booking.services, "Ingen"),
        ("Antall deltakere", booking.attendees, NOT_GIVEN),
        ("Melding", booking.message, "Ingen melding oppgitt."),
    ]


def board_notification(
    booking: Booking,
    approve_link: str,
    reject_link: str,
    venue_name: str,
) -> EmailContent:
    subject_parts = ["Ny bookingforespørsel"]
    if booking.event_type:
        subject_parts.append(booking.event_type)
    subject_parts.append(f"{booking.date} {booking.time}")
    subject = " – ".join(subject_parts)

    rows = _detail_rows(booking)
    text = "\n".join(
        [
            "Ny bookingforespørsel venter på godkjenning:",
            "",
            *(f"{label}: {_text(value, fallback)}" for label, value, fallback in rows),
            "",
            f"Godkjenn: {approve_link}",
            f"Avvis: {reject_link}",
        ]
    )

    items = "".join(
        f"<li><strong>{escape(label)}:</strong> {_html(value, fallback)}</li>"
        for label, value, fallback in rows
    )
    html = (
        "<p>Hei styret,</p>"
        "<p>Det har kommet en ny bookingforespørsel som venter på godkjenning:</p>"
        f"<ul>{items}</ul>"
        "<p>Bruk knappene under for å godkjenne eller avvise:</p>"
        "<p>"
        f'<a href="{escape(approve_link, quote=True)}" style="display:inline-block;padding:10px 16px;'
        'margin-right:12px;background:#1a823b;color:#ffffff;text-decoration:none;border-radius:4px;">'
        "Godkjenn booking</a>"
        f'<a href="{escape(reject_link, quote=True)}" style="display:inline-block;padding:10px 16px;'
        'background:#b3261e;color:#ffffff;text-decoration:none;border-radius:4px;">'
        "Avvis booking</a>"
        "</p>"
        f"<p>Vennlig hilsen<br/>{escape(venue_name)}</p>"
    )
    return EmailContent(subject=subject, text=text, html=html)


def requester_receipt(booking: Booking, venue_name: str) -> EmailContent:
    name = booking.requester.name or "der"
    when = f"{booking.date} kl {booking.time}"
    if booking.status in (BookingStatus.confirmed, BookingStatus.approved):
        lead = f"Din booking {when} er registrert og bekreftet."
    else:
        lead = (
            f"Din bookingforespørsel {when} er mottatt og vises nå i kalenderen. "
            "Du blir kontaktet av styret for endelig bekreftelse."
        )

    rows = _detail_rows(booking)
    text = "\n".join(
        [
            f"Hei {name},",
            "",
            lead,
            "",
            *(f"{label}: {_text(value, fallback)}" for label, value, fallback in rows),
            "",
            f"Hilsen {venue_name}",
        ]
    )
    html = (
        f"<p>Hei {escape(name)},</p>"
        f"<p>{escape(lead)}</p>"
        "<ul>"
        + "".join(
            f"<li><strong>{escape(label)}:</strong> {_html(value, fallback)}</li>"
            for label, value, fallback in rows
        )
        + "</ul>"
        f"<p>Hilsen {escape(venue_name)}</p>"
    )
    return EmailContent(subject=f"Bookingforespørsel mottatt – {when}", text=text, html=html)


def status_notification(booking: Booking, venue_name: str) -> EmailContent:
    name = booking.requester.name or "der"
    when = f"{booking.date} kl {booking.time}"
    if booking.status is BookingStatus.approved:
        subject = "Booking bekreftet"
        text = f"Hei {name},\n\nDin booking {when} er nå bekreftet.\n\nHilsen {venue_name}."
        html = (
            f"<p>Hei {escape(name)},</p>"
            f"<p>Bookingen din {escape(when)} er nå <strong>bekreftet</strong>.</p>"
            f"<p>Hilsen {escape(venue_name)}.</p>"
        )
    else:
        subject = "Booking avvist"
        text = (
            f"Hei {name},\n\nVi kan dessverre ikke imøtekomme bookingen {when}.\n\n"
            f"Hilsen {venue_name}."
        )
        html = (
            f"<p>Hei {escape(name)},</p>"
            f"<p>Vi kan dessverre ikke imøtekomme bookingen {escape(when)}. "
            "Bookingen er markert som <strong>avvist</strong>.</p>"
            f"<p>Hilsen {escape(venue_name)}.</p>"
        )
    return EmailContent(subject=subject, text=text, html=html)
