"""Properties API routes — public browsing and quotes, admin-only writes."""

import logging
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from staypoint.api.deps import get_admin_user, get_db
from staypoint.booking import BookingError, availability_label, compute_quote, is_available
from staypoint.models.property import Property
from staypoint.models.user import User
from staypoint.schemas.property import (
    PROPERTY_TYPE_PATTERN,
    SORT_PATTERN,
    PropertyCreate,
    PropertyListingResponse,
    PropertyListResponse,
    PropertyResponse,
    PropertyUpdate,
    QuoteRequest,
    QuoteResponse,
)
from staypoint.services.property_service import SearchCriteria, list_locations, search_properties

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _today() -> date:
    return datetime.now(timezone.utc).date()


def _listing(prop: Property, as_of: date) -> PropertyListingResponse:
    """Serialize a property with its availability as of ``as_of``."""
    base = PropertyResponse.model_validate(prop)
    return PropertyListingResponse(
        **base.model_dump(),
        is_available=is_available(prop, as_of),
        availability_label=availability_label(prop, as_of),
    )


async def _get_property_or_404(property_id: uuid.UUID, db: AsyncSession) -> Property:
    prop = await db.get(Property, property_id)
    if prop is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found",
        )
    return prop


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="Search and list properties",
)
async def list_properties(
    location: str | None = Query(None, description="Case-insensitive substring of the location"),
    property_type: str | None = Query(None, pattern=PROPERTY_TYPE_PATTERN),
    max_price: Decimal | None = Query(None, gt=0, description="Maximum nightly price"),
    min_bedrooms: int | None = Query(None, ge=0),
    guests: int | None = Query(None, ge=1, description="Number of guests to accommodate"),
    amenities: list[str] = Query([], description="Required amenities"),
    check_in: date | None = Query(None, description="Only properties free from this date"),
    check_out: date | None = Query(None, description="Only properties free until this date"),
    sort: str = Query("newest", pattern=SORT_PATTERN),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int = Query(20, ge=1, le=100, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
) -> PropertyListResponse:
    """Return a filtered, sorted, paginated list of properties."""
    if (check_in is None) != (check_out is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="check_in and check_out must be provided together",
        )
    if check_in is not None and check_out <= check_in:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="check_out must be after check_in",
        )

    criteria = SearchCriteria(
        location=location,
        property_type=property_type,
        max_price=max_price,
        min_bedrooms=min_bedrooms,
        guests=guests,
        amenities=amenities,
        check_in=check_in,
        check_out=check_out,
        sort=sort,
    )
    matches = await search_properties(db, criteria)

    today = _today()
    page = matches[skip : skip + limit]
    return PropertyListResponse(
        items=[_listing(p, today) for p in page],
        total=len(matches),
    )


@router.get(
    "/locations",
    response_model=list[str],
    summary="Distinct property locations for search suggestions",
)
async def get_locations(db: AsyncSession = Depends(get_db)) -> list[str]:
    return await list_locations(db)


@router.get(
    "/{property_id}",
    response_model=PropertyListingResponse,
    summary="Get a property by ID",
)
async def get_property(
    property_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> PropertyListingResponse:
    """Retrieve a single property with its current availability."""
    prop = await _get_property_or_404(property_id, db)
    return _listing(prop, _today())


@router.post(
    "/{property_id}/quote",
    response_model=QuoteResponse,
    summary="Price a stay",
)
async def quote_stay(
    property_id: uuid.UUID,
    body: QuoteRequest,
    db: AsyncSession = Depends(get_db),
) -> QuoteResponse:
    """Compute nights and total price for the given dates."""
    prop = await _get_property_or_404(property_id, db)
    try:
        quote = compute_quote(body.check_in, body.check_out, prop.price_per_night)
    except BookingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from None

    return QuoteResponse(
        property_id=prop.id,
        check_in=body.check_in,
        check_out=body.check_out,
        nights=quote.nights,
        price_per_night=quote.price_per_night,
        total_price=quote.total_price,
    )


# ---------------------------------------------------------------------------
# Admin endpoints
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new property",
)
async def create_property(
    body: PropertyCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
) -> PropertyResponse:
    """Create a listing. Admin only."""
    prop = Property(created_by=admin.id, **body.model_dump())
    db.add(prop)
    await db.flush()
    await db.refresh(prop)

    logger.info("Admin %s created property %s", admin.id, prop.id)
    return PropertyResponse.model_validate(prop)


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Update a property",
)
async def update_property(
    property_id: uuid.UUID,
    body: PropertyUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
) -> PropertyResponse:
    """Partially update a property. Only explicitly set fields are changed."""
    prop = await _get_property_or_404(property_id, db)

    update_data = body.model_dump(exclude_unset=True)
    new_from = update_data.get("available_from", prop.available_from)
    new_to = update_data.get("available_to", prop.available_to)
    if new_from is not None and new_to is not None and new_from > new_to:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="available_from must not be after available_to",
        )

    for field, value in update_data.items():
        setattr(prop, field, value)

    db.add(prop)
    await db.flush()
    await db.refresh(prop)
    return PropertyResponse.model_validate(prop)


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a property",
)
async def delete_property(
    property_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
) -> None:
    """Delete a property and cascade-delete its bookings."""
    result = await db.execute(
        select(Property).options(selectinload(Property.bookings)).where(Property.id == property_id)
    )
    prop = result.scalar_one_or_none()
    if prop is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found",
        )

    await db.delete(prop)
    await db.flush()

    logger.info("Admin %s deleted property %s", admin.id, property_id)
