"""Booking persistence helpers used by the bookings router."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from staypoint.booking import (
    BookingError,
    BookingQuote,
    BookingRequest,
    FollowUp,
    compute_quote,
    required_follow_ups,
    validate_booking,
    window_covers_stay,
)
from staypoint.models.booking import Booking
from staypoint.models.property import Property
from staypoint.models.user import User
from staypoint.schemas.booking import BookingCreate

logger = logging.getLogger(__name__)


class StayOutsideWindow(BookingError):
    """The requested stay is outside the property's availability window."""


class DatesUnavailable(BookingError):
    """Another non-cancelled booking overlaps the requested stay."""


@dataclass
class SubmittedBooking:
    """A persisted booking with its quote and owed follow-ups."""

    booking: Booking
    quote: BookingQuote
    follow_ups: tuple[FollowUp, ...]


def to_booking_request(body: BookingCreate) -> BookingRequest:
    """Build the engine's request value from the API payload."""
    return BookingRequest(
        guest_name=body.guest_name,
        guest_email=body.guest_email,
        guest_phone=body.guest_phone,
        check_in=body.check_in,
        check_out=body.check_out,
        visa_posture=body.visa_posture,
        wants_invitation_letter=body.needs_invitation,
        passport_number=body.passport_number,
        passport_country=body.passport_country,
        passport_expiry=body.passport_expiry,
    )


def property_lock_query(property_id: uuid.UUID) -> Select:
    """Row lock on a property, taken before its booked dates are checked.

    Concurrent submissions for the same property serialize on this lock
    until the first transaction commits. SQLite ignores ``FOR UPDATE``.
    """
    return select(Property.id).where(Property.id == property_id).with_for_update()


async def find_conflicting_booking(
    db: AsyncSession,
    property_id: uuid.UUID,
    check_in: date,
    check_out: date,
    exclude_id: uuid.UUID | None = None,
) -> Booking | None:
    """Return a non-cancelled booking overlapping the stay, if any.

    ``exclude_id`` skips a booking being re-checked against its own dates.
    """
    filters = [
        Booking.property_id == property_id,
        Booking.status != "cancelled",
        Booking.check_in < check_out,
        Booking.check_out > check_in,
    ]
    if exclude_id is not None:
        filters.append(Booking.id != exclude_id)

    result = await db.execute(select(Booking).where(*filters).limit(1))
    return result.scalar_one_or_none()


async def set_booking_status(db: AsyncSession, booking: Booking, new_status: str) -> Booking:
    """Change a booking's status.

    Reopening a cancelled booking claims its dates again, so it must not
    overlap another live booking.

    Raises:
        DatesUnavailable: If the reopened stay conflicts with another booking.
    """
    if booking.status == "cancelled" and new_status != "cancelled":
        await db.execute(property_lock_query(booking.property_id))
        conflict = await find_conflicting_booking(
            db, booking.property_id, booking.check_in, booking.check_out, exclude_id=booking.id
        )
        if conflict is not None:
            raise DatesUnavailable(f"Dates conflict with booking {conflict.id}")

    booking.status = new_status
    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    return booking


async def create_booking(
    db: AsyncSession,
    prop: Property,
    body: BookingCreate,
    user: User | None,
) -> SubmittedBooking:
    """Validate, price and persist a booking as ``pending``.

    Raises:
        BookingValidationError: If any booking rule fails.
        StayOutsideWindow: If the stay falls outside the property's window.
        DatesUnavailable: If another booking already holds the dates.
    """
    request = to_booking_request(body)
    validate_booking(request).raise_for_errors()

    if not window_covers_stay(prop, request.check_in, request.check_out):
        raise StayOutsideWindow("Property is not available for the selected dates")
    await db.execute(property_lock_query(prop.id))
    if await find_conflicting_booking(db, prop.id, request.check_in, request.check_out) is not None:
        raise DatesUnavailable("Dates conflict with an existing booking")

    quote = compute_quote(request.check_in, request.check_out, prop.price_per_night)
    passport_required = request.passport_required

    booking = Booking(
        user_id=user.id if user else None,
        property=prop,
        guest_name=request.guest_name.strip(),
        guest_email=request.guest_email.strip(),
        guest_phone=request.guest_phone.strip(),
        check_in=request.check_in,
        check_out=request.check_out,
        total_price=quote.total_price,
        status="pending",
        visa_posture=request.visa_posture.value,
        needs_invitation=passport_required,
        # Passport details are only kept when an invitation letter needs them
        passport_number=request.passport_number if passport_required else None,
        passport_country=request.passport_country if passport_required else None,
        passport_expiry=request.passport_expiry if passport_required else None,
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    follow_ups = required_follow_ups(request.visa_posture, request.wants_invitation_letter)
    logger.info(
        "Created booking %s for property %s: %d nights, total %s, follow-ups=%s",
        booking.id,
        prop.id,
        quote.nights,
        quote.total_price,
        ",".join(f.value for f in follow_ups),
    )
    return SubmittedBooking(booking=booking, quote=quote, follow_ups=follow_ups)
