"""Nightly price quotes for a prospective stay."""

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from staypoint.booking.errors import InvalidDateRange, InvalidPrice

CENTS = Decimal("0.01")
_SECONDS_PER_DAY = 86_400


@dataclass(frozen=True)
class BookingQuote:
    """Nights and total price for a stay."""

    nights: int
    price_per_night: Decimal
    total_price: Decimal


def count_nights(check_in: date | datetime, check_out: date | datetime) -> int:
    """Return the number of nights between two dates.

    A partial day counts as a full night when datetimes are passed.

    Raises:
        InvalidDateRange: If ``check_out`` is not strictly after ``check_in``.
    """
    if isinstance(check_in, datetime) or isinstance(check_out, datetime):
        start, end = _as_datetime(check_in), _as_datetime(check_out)
        if end <= start:
            raise InvalidDateRange("check_out must be after check_in")
        return math.ceil((end - start).total_seconds() / _SECONDS_PER_DAY)

    if check_out <= check_in:
        raise InvalidDateRange("check_out must be after check_in")
    return (check_out - check_in).days


def compute_quote(
    check_in: date | datetime,
    check_out: date | datetime,
    price_per_night: Decimal | int | float | str,
) -> BookingQuote:
    """Compute the quote for a stay.

    ``total_price`` is ``nights * price_per_night`` rounded half-up to cents.

    Raises:
        InvalidDateRange: If ``check_out`` is not strictly after ``check_in``.
        InvalidPrice: If ``price_per_night`` is not positive.
    """
    price = _to_decimal(price_per_night)
    if price <= 0:
        raise InvalidPrice("price_per_night must be greater than zero")

    nights = count_nights(check_in, check_out)
    total = (price * nights).quantize(CENTS, rounding=ROUND_HALF_UP)
    return BookingQuote(nights=nights, price_per_night=price, total_price=total)


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so floats like 150.1 don't carry binary noise
    return Decimal(str(value))


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)
