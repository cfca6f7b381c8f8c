"""Bookings API router.

Anyone may submit a booking; signed-in guests see their own bookings and
admins see all of them.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from staypoint.api.deps import get_admin_user, get_current_user, get_db, get_optional_user, is_admin
from staypoint.booking import BookingValidationError
from staypoint.models.booking import Booking
from staypoint.models.property import Property
from staypoint.models.user import User
from staypoint.schemas.booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingDetailResponse,
    BookingListResponse,
    BookingResponse,
    BookingStatusUpdate,
    GuestDocumentResponse,
)
from staypoint.services.booking_service import (
    DatesUnavailable,
    StayOutsideWindow,
    create_booking,
    set_booking_status,
)
from staypoint.services.document_service import (
    DocumentNotApplicable,
    compose_document,
    dispatch_document,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _get_visible_booking(
    booking_id: uuid.UUID,
    current_user: User,
    db: AsyncSession,
) -> Booking:
    """Fetch a booking the current user may see.

    Raises ``HTTPException 404`` when the booking does not exist, or when it
    belongs to someone else and the user is not an admin.
    """
    result = await db.execute(
        select(Booking).options(selectinload(Booking.property)).where(Booking.id == booking_id)
    )
    booking = result.scalar_one_or_none()
    if booking is None or (booking.user_id != current_user.id and not is_admin(current_user)):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return booking


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=BookingCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a booking",
)
async def submit_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
) -> BookingCreatedResponse:
    """Validate and create a pending booking.

    Returns 422 with every failing field when validation fails, and 409 when
    the property isn't available for the requested dates.
    """
    prop = await db.get(Property, body.property_id)
    if prop is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found",
        )

    try:
        submitted = await create_booking(db, prop, body, current_user)
    except BookingValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Booking request is invalid", "errors": exc.errors},
        ) from None
    except (StayOutsideWindow, DatesUnavailable) as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from None

    return BookingCreatedResponse(
        booking=BookingResponse.model_validate(submitted.booking),
        nights=submitted.quote.nights,
        follow_ups=list(submitted.follow_ups),
    )


@router.get(
    "",
    response_model=BookingListResponse,
    summary="List the current user's bookings",
)
async def list_my_bookings(
    status_filter: str | None = Query(None, alias="status", description="Filter by booking status"),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int = Query(20, ge=1, le=100, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    """Return the signed-in guest's bookings, newest first."""
    filters = [Booking.user_id == current_user.id]
    if status_filter is not None:
        filters.append(Booking.status == status_filter)

    total_result = await db.execute(select(func.count()).select_from(Booking).where(*filters))
    total = total_result.scalar_one()

    result = await db.execute(
        select(Booking).where(*filters).order_by(Booking.created_at.desc()).offset(skip).limit(limit)
    )
    return {"items": list(result.scalars().all()), "total": total}


@router.get(
    "/{booking_id}",
    response_model=BookingDetailResponse,
    summary="Get booking detail with nested property",
)
async def get_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Booking:
    """Retrieve a single booking for the confirmation page."""
    return await _get_visible_booking(booking_id, current_user, db)


@router.post(
    "/{booking_id}/cancel",
    response_model=BookingResponse,
    summary="Cancel a booking",
)
async def cancel_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Booking:
    """Cancel a booking owned by the current user (or any booking, for admins)."""
    booking = await _get_visible_booking(booking_id, current_user, db)
    if booking.status == "cancelled":
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Booking is already cancelled",
        )

    await set_booking_status(db, booking, "cancelled")

    logger.info("Booking %s cancelled by user %s", booking.id, current_user.id)
    return booking


@router.put(
    "/{booking_id}/status",
    response_model=BookingResponse,
    summary="Set a booking's status",
)
async def update_booking_status(
    booking_id: uuid.UUID,
    body: BookingStatusUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
) -> Booking:
    """Confirm, cancel or reopen a booking. Admin only.

    Reopening a cancelled booking returns 409 if its dates have since been
    taken by another booking.
    """
    booking = await _get_visible_booking(booking_id, admin, db)

    try:
        await set_booking_status(db, booking, body.status)
    except DatesUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from None

    logger.info("Admin %s set booking %s to %s", admin.id, booking.id, body.status)
    return booking


@router.post(
    "/{booking_id}/documents/{kind}",
    response_model=GuestDocumentResponse,
    summary="Compose and send a guest document",
)
async def send_document(
    booking_id: uuid.UUID,
    kind: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> GuestDocumentResponse:
    """Compose a booking confirmation or visa invitation letter.

    Delivery is simulated: the document is logged and returned.
    """
    booking = await _get_visible_booking(booking_id, current_user, db)

    try:
        document = compose_document(booking, kind)
    except DocumentNotApplicable as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from None
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from None

    return GuestDocumentResponse(
        booking_id=booking.id,
        kind=document.kind,
        recipient_email=document.recipient_email,
        subject=document.subject,
        body=document.body,
        status=dispatch_document(document),
    )
