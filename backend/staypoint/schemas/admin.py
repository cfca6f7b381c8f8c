"""Pydantic v2 schemas for the admin dashboard."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from staypoint.schemas.auth import ACCOUNT_STATUS_PATTERN, ROLE_PATTERN, UserResponse


class PropertyStatResponse(BaseModel):
    """Performance figures for a single property."""

    property_id: uuid.UUID
    title: str
    bookings_count: int
    total_revenue: Decimal
    occupancy_rate: Decimal  # percentage 0.00–100.00

    model_config = ConfigDict(from_attributes=True)


class DashboardStatsResponse(BaseModel):
    """Admin overview: totals plus the revenue ranking."""

    as_of: datetime
    window_days: int
    total_properties: int
    total_bookings: int
    total_revenue: Decimal
    total_users: int
    pending_users: int
    recent_bookings: int
    property_stats: list[PropertyStatResponse]


class UserListResponse(BaseModel):
    """Paginated list of users."""

    items: list[UserResponse]
    total: int


class RoleUpdate(BaseModel):
    """Change a user's role."""

    role: str = Field(..., pattern=ROLE_PATTERN)


class UserStatusUpdate(BaseModel):
    """Approve or reject an account."""

    status: str = Field(..., pattern=ACCOUNT_STATUS_PATTERN)
