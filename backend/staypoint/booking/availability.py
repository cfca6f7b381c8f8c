"""Availability windows for properties."""

from datetime import date, datetime
from typing import Protocol

from staypoint.booking.errors import InvalidDateRange

AVAILABLE_FROM_FUTURE_DATE = "available-from-future-date"
EXPIRED = "expired"
AVAILABLE_UNTIL_DATE = "available-until-date"


class HasAvailabilityWindow(Protocol):
    available_from: date | None
    available_to: date | None


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _window(prop: HasAvailabilityWindow) -> tuple[date, date] | None:
    """Return the ``(from, to)`` window, or None when either bound is unset."""
    if prop.available_from is None or prop.available_to is None:
        return None
    start, end = _as_date(prop.available_from), _as_date(prop.available_to)
    if start > end:
        raise InvalidDateRange("available_from must not be after available_to")
    return start, end


def is_available(prop: HasAvailabilityWindow, as_of: date | datetime) -> bool:
    """Return True if the property can be booked on ``as_of``.

    Properties without a complete window are always available.
    """
    window = _window(prop)
    if window is None:
        return True
    start, end = window
    return start <= _as_date(as_of) <= end


def availability_label(prop: HasAvailabilityWindow, as_of: date | datetime) -> str | None:
    """Return a display label describing where ``as_of`` falls in the window."""
    window = _window(prop)
    if window is None:
        return None
    start, end = window
    day = _as_date(as_of)
    if day < start:
        return AVAILABLE_FROM_FUTURE_DATE
    if day > end:
        return EXPIRED
    return AVAILABLE_UNTIL_DATE


def window_covers_stay(prop: HasAvailabilityWindow, check_in: date, check_out: date) -> bool:
    """Return True if the whole stay lies inside the property's window.

    The check-out day itself is not a booked night, so a stay may end the
    day after ``available_to``.
    """
    window = _window(prop)
    if window is None:
        return True
    start, end = window
    return start <= check_in and check_out <= date.fromordinal(end.toordinal() + 1)
