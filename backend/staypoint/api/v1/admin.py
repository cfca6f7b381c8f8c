"""Admin API router: dashboard statistics, all bookings, user roles and approvals."""

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from staypoint.api.deps import get_admin_user, get_db
from staypoint.booking import summarize_dashboard
from staypoint.config import settings
from staypoint.models.booking import Booking
from staypoint.models.property import Property
from staypoint.models.user import User
from staypoint.schemas.admin import (
    DashboardStatsResponse,
    PropertyStatResponse,
    RoleUpdate,
    UserListResponse,
    UserStatusUpdate,
)
from staypoint.schemas.auth import UserResponse
from staypoint.schemas.booking import BookingListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
) -> DashboardStatsResponse:
    """Headline totals and properties ranked by revenue.

    ``occupancy_rate`` counts bookings created in the trailing window
    (``settings.occupancy_window_days``) per day of that window, capped at
    100%. It is a booking-frequency signal, not night occupancy.
    """
    properties_result = await db.execute(select(Property).order_by(Property.created_at.desc()))
    properties = list(properties_result.scalars().all())

    bookings_result = await db.execute(select(Booking).order_by(Booking.created_at.desc()))
    bookings = list(bookings_result.scalars().all())

    users_result = await db.execute(select(func.count()).select_from(User))
    total_users = users_result.scalar_one()

    pending_result = await db.execute(select(func.count()).select_from(User).where(User.status == "pending"))
    pending_users = pending_result.scalar_one()

    as_of = datetime.now(timezone.utc)
    window_days = settings.occupancy_window_days
    summary = summarize_dashboard(properties, bookings, total_users, as_of, window_days)

    return DashboardStatsResponse(
        as_of=as_of,
        window_days=window_days,
        total_properties=summary.total_properties,
        total_bookings=summary.total_bookings,
        total_revenue=summary.total_revenue,
        total_users=summary.total_users,
        pending_users=pending_users,
        recent_bookings=summary.recent_bookings,
        property_stats=[PropertyStatResponse.model_validate(s) for s in summary.property_stats],
    )


@router.get("/bookings", response_model=BookingListResponse)
async def list_all_bookings(
    property_id: uuid.UUID | None = Query(None, description="Filter by property"),
    status_filter: str | None = Query(None, alias="status", description="Filter by booking status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
) -> dict:
    """Every booking on the platform, newest first."""
    filters = []
    if property_id is not None:
        filters.append(Booking.property_id == property_id)
    if status_filter is not None:
        filters.append(Booking.status == status_filter)

    total_result = await db.execute(select(func.count()).select_from(Booking).where(*filters))
    total = total_result.scalar_one()

    result = await db.execute(
        select(Booking).where(*filters).order_by(Booking.created_at.desc()).offset(skip).limit(limit)
    )
    return {"items": list(result.scalars().all()), "total": total}


@router.get("/users", response_model=UserListResponse)
async def list_users(
    status_filter: str | None = Query(None, alias="status", description="Filter by account status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
) -> UserListResponse:
    """All registered accounts, newest first."""
    filters = []
    if status_filter is not None:
        filters.append(User.status == status_filter)

    total_result = await db.execute(select(func.count()).select_from(User).where(*filters))
    total = total_result.scalar_one()

    result = await db.execute(
        select(User).where(*filters).order_by(User.created_at.desc()).offset(skip).limit(limit)
    )
    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in result.scalars().all()],
        total=total,
    )


@router.put("/users/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: uuid.UUID,
    body: RoleUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
) -> UserResponse:
    """Grant or revoke the admin role."""
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    if user.id == admin.id and body.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot revoke their own admin role",
        )

    user.role = body.role
    db.add(user)
    await db.flush()
    await db.refresh(user)

    logger.info("Admin %s set role of user %s to %s", admin.id, user.id, body.role)
    return UserResponse.model_validate(user)


@router.put("/users/{user_id}/status", response_model=UserResponse)
async def update_user_status(
    user_id: uuid.UUID,
    body: UserStatusUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_admin_user),
) -> UserResponse:
    """Approve or reject an account, typically a pending admin sign-up."""
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    if user.id == admin.id and body.status != "approved":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot revoke their own approval",
        )

    user.status = body.status
    db.add(user)
    await db.flush()
    await db.refresh(user)

    logger.info("Admin %s set status of user %s to %s", admin.id, user.id, body.status)
    return UserResponse.model_validate(user)
