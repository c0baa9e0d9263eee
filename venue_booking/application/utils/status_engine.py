from __future__ import annotations

from typing import Any, Iterable

from venue_booking.application.exceptions import InvalidTransitionError
from venue_booking.domain.entities.booking import BookingStatus, StatusPolicy

ENTIRE_VENUE_SPACES: frozenset[str] = frozenset({"hele lokalet"})
AUTO_CONFIRM_HOURS = 8.0

RECOGNISED_STATUSES: dict[StatusPolicy, frozenset[BookingStatus]] = {
    StatusPolicy.heuristic: frozenset(
        {BookingStatus.pending, BookingStatus.confirmed, BookingStatus.blocked}
    ),
    StatusPolicy.board: frozenset(
        {BookingStatus.pending, BookingStatus.approved, BookingStatus.rejected}
    ),
}

BOARD_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.pending: frozenset({BookingStatus.approved, BookingStatus.rejected}),
    BookingStatus.approved: frozenset(),
    BookingStatus.rejected: frozenset(),
}


def recognise_status(value: Any, policy: StatusPolicy) -> BookingStatus | None:
    """Return the status if ``value`` names one the policy knows, else None."""
    if isinstance(value, BookingStatus):
        status = value
    elif isinstance(value, str):
        try:
            status = BookingStatus(value.strip().lower())
        except ValueError:
            return None
    else:
        return None
    return status if status in RECOGNISED_STATUSES[policy] else None


def is_entire_venue(spaces: Iterable[str], entire_venue: Iterable[str] = ENTIRE_VENUE_SPACES) -> bool:
    names = {name.strip().lower() for name in entire_venue}
    return any(space.strip().lower() in names for space in spaces)


def compute_status(
    spaces: Iterable[str],
    duration_hours: float,
    explicit: Any = None,
    policy: StatusPolicy = StatusPolicy.heuristic,
    entire_venue: Iterable[str] = ENTIRE_VENUE_SPACES,
    auto_confirm_hours: float = AUTO_CONFIRM_HOURS,
) -> BookingStatus:
    recognised = recognise_status(explicit, policy)
    if recognised is not None:
        return recognised

    if policy is StatusPolicy.board:
        return BookingStatus.pending

    if is_entire_venue(spaces, entire_venue) or duration_hours >= auto_confirm_hours:
        return BookingStatus.confirmed
    return BookingStatus.pending


def transition(current: BookingStatus, target: BookingStatus, policy: StatusPolicy) -> BookingStatus:
    """
    Validate a status change and return the resulting status.
    Re-applying the current status is allowed and changes nothing.
    """
    if policy is StatusPolicy.heuristic:
        raise InvalidTransitionError(
            "Bookings are not changed after creation under the heuristic status policy"
        )
    if target not in RECOGNISED_STATUSES[policy]:
        raise InvalidTransitionError(f"Unknown status '{target.value}' for the board policy")
    if target == current:
        return current
    if target not in BOARD_TRANSITIONS.get(current, frozenset()):
        raise InvalidTransitionError(
            f"Booking is already {current.value}; cannot change it to {target.value}"
        )
    return target
