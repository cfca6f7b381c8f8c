"""Admin dashboard aggregation over already-fetched properties and bookings.

``occupancy_rate`` is a recency proxy, not night occupancy: the number of
bookings *created* in the trailing window divided by the window length,
capped at 100%.
"""

import uuid
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from staypoint.booking.quote import CENTS

DEFAULT_WINDOW_DAYS = 30


class StatProperty(Protocol):
    id: uuid.UUID
    title: str


class StatBooking(Protocol):
    property_id: uuid.UUID
    total_price: Decimal | None
    created_at: datetime


@dataclass(frozen=True)
class PropertyStat:
    """Performance figures for one property."""

    property_id: uuid.UUID
    title: str
    bookings_count: int
    total_revenue: Decimal
    occupancy_rate: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Headline totals plus the ranked per-property stats."""

    total_properties: int
    total_bookings: int
    total_revenue: Decimal
    total_users: int
    recent_bookings: int
    property_stats: list[PropertyStat]


def _naive_utc(value: date | datetime) -> datetime:
    """Normalize to a naive UTC datetime. A plain date means the end of that day."""
    if not isinstance(value, datetime):
        return datetime.combine(value, time.max)
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _check_window(window_days: int) -> None:
    if window_days <= 0:
        raise ValueError(f"window_days must be positive, got {window_days}")


def _is_recent(created_at: datetime | None, window_start: datetime, as_of: datetime) -> bool:
    if created_at is None:
        return False
    return window_start < _naive_utc(created_at) <= as_of


def aggregate_property_stats(
    properties: Sequence[StatProperty],
    bookings: Iterable[StatBooking],
    as_of: date | datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> list[PropertyStat]:
    """Rank properties by revenue.

    Bookings whose property is not in ``properties`` are ignored. Every
    property appears in the result, including ones without bookings. Ties
    keep the order of ``properties``.
    """
    _check_window(window_days)
    as_of = _naive_utc(as_of)
    window_start = as_of - timedelta(days=window_days)

    by_property: dict[uuid.UUID, list[StatBooking]] = defaultdict(list)
    for booking in bookings:
        by_property[booking.property_id].append(booking)

    stats: list[PropertyStat] = []
    for prop in properties:
        prop_bookings = by_property.get(prop.id, [])
        revenue = sum((b.total_price or Decimal("0") for b in prop_bookings), Decimal("0"))
        recent = sum(1 for b in prop_bookings if _is_recent(b.created_at, window_start, as_of))

        rate = min(Decimal(recent * 100) / Decimal(window_days), Decimal(100))
        stats.append(
            PropertyStat(
                property_id=prop.id,
                title=prop.title,
                bookings_count=len(prop_bookings),
                total_revenue=revenue.quantize(CENTS, rounding=ROUND_HALF_UP),
                occupancy_rate=rate.quantize(CENTS, rounding=ROUND_HALF_UP),
            )
        )

    # sorted() is stable, so equal revenue keeps property order
    return sorted(stats, key=lambda s: s.total_revenue, reverse=True)


def summarize_dashboard(
    properties: Sequence[StatProperty],
    bookings: Sequence[StatBooking],
    total_users: int,
    as_of: date | datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> DashboardSummary:
    """Build the admin overview: totals across all bookings plus the ranking."""
    _check_window(window_days)
    as_of_naive = _naive_utc(as_of)
    window_start = as_of_naive - timedelta(days=window_days)

    total_revenue = sum((b.total_price or Decimal("0") for b in bookings), Decimal("0"))
    recent = sum(1 for b in bookings if _is_recent(b.created_at, window_start, as_of_naive))

    return DashboardSummary(
        total_properties=len(properties),
        total_bookings=len(bookings),
        total_revenue=total_revenue.quantize(CENTS, rounding=ROUND_HALF_UP),
        total_users=total_users,
        recent_bookings=recent,
        property_stats=aggregate_property_stats(properties, bookings, as_of, window_days),
    )
