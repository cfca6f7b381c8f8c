"""Property search — database filters plus in-memory amenity, window and sort rules."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from staypoint.booking import window_covers_stay
from staypoint.models.booking import Booking
from staypoint.models.property import Property

logger = logging.getLogger(__name__)

SORT_KEYS = {
    "price_low": (lambda p: p.price_per_night, False),
    "price_high": (lambda p: p.price_per_night, True),
    "newest": (lambda p: p.created_at, True),
    "oldest": (lambda p: p.created_at, False),
    "bedrooms": (lambda p: p.bedrooms, True),
    "guests": (lambda p: p.max_guests, True),
}


@dataclass
class SearchCriteria:
    """Filters accepted by the property listing endpoint."""

    location: str | None = None
    property_type: str | None = None
    max_price: Decimal | None = None
    min_bedrooms: int | None = None
    guests: int | None = None
    amenities: list[str] = field(default_factory=list)
    check_in: date | None = None
    check_out: date | None = None
    sort: str = "newest"

    @property
    def has_stay(self) -> bool:
        return self.check_in is not None and self.check_out is not None


def has_amenities(prop: Property, wanted: Sequence[str]) -> bool:
    """Return True if the property offers every wanted amenity (case-insensitive)."""
    offered = {a.strip().lower() for a in prop.amenities or []}
    return all(a.strip().lower() in offered for a in wanted)


def sort_properties(properties: Sequence[Property], sort: str) -> list[Property]:
    """Order properties by one of the listing sort options."""
    try:
        key, reverse = SORT_KEYS[sort]
    except KeyError:
        raise ValueError(f"Unknown sort option '{sort}'") from None
    return sorted(properties, key=key, reverse=reverse)


async def search_properties(db: AsyncSession, criteria: SearchCriteria) -> list[Property]:
    """Return properties matching ``criteria``, sorted.

    When stay dates are given, properties with an overlapping non-cancelled
    booking, or whose availability window doesn't cover the stay, are
    excluded.
    """
    filters = []
    if criteria.location:
        filters.append(Property.location.ilike(f"%{criteria.location}%"))
    if criteria.property_type:
        filters.append(Property.property_type == criteria.property_type)
    if criteria.max_price is not None:
        filters.append(Property.price_per_night <= criteria.max_price)
    if criteria.min_bedrooms is not None:
        filters.append(Property.bedrooms >= criteria.min_bedrooms)
    if criteria.guests is not None:
        filters.append(Property.max_guests >= criteria.guests)

    if criteria.has_stay:
        booked = select(Booking.property_id).where(
            Booking.status != "cancelled",
            Booking.check_in < criteria.check_out,
            Booking.check_out > criteria.check_in,
        )
        filters.append(Property.id.not_in(booked))

    result = await db.execute(select(Property).where(*filters))
    properties = list(result.scalars().all())

    if criteria.amenities:
        properties = [p for p in properties if has_amenities(p, criteria.amenities)]
    if criteria.has_stay:
        properties = [p for p in properties if window_covers_stay(p, criteria.check_in, criteria.check_out)]

    logger.debug("Property search matched %d properties", len(properties))
    return sort_properties(properties, criteria.sort)


async def list_locations(db: AsyncSession) -> list[str]:
    """Distinct property locations, alphabetically, for search suggestions."""
    result = await db.execute(select(Property.location).distinct().order_by(Property.location))
    return [loc for loc in result.scalars().all() if loc]
