"""Pydantic v2 request/response schemas for property endpoints."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

PROPERTY_TYPE_PATTERN = "^(apartment|house|villa|condo|studio|townhouse|loft|cabin|cottage)$"
SORT_PATTERN = "^(price_low|price_high|newest|oldest|bedrooms|guests)$"

_REQUIRED_ON_UPDATE = frozenset(
    {
        "title",
        "description",
        "location",
        "price_per_night",
        "bedrooms",
        "bathrooms",
        "max_guests",
        "amenities",
        "images",
    }
)

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PropertyCreate(BaseModel):
    """Schema for creating a new property."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    location: str = Field(..., min_length=1, max_length=255)
    property_type: str | None = Field(None, pattern=PROPERTY_TYPE_PATTERN)
    price_per_night: Decimal = Field(..., gt=0)
    bedrooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    max_guests: int = Field(1, ge=0)
    amenities: list[str] = []
    images: list[str] = []
    available_from: date | None = None
    available_to: date | None = None

    @model_validator(mode="after")
    def check_window(self) -> "PropertyCreate":
        """Validate that the availability window is not inverted."""
        if (
            self.available_from is not None
            and self.available_to is not None
            and self.available_from > self.available_to
        ):
            raise ValueError("available_from must not be after available_to")
        return self


class PropertyUpdate(BaseModel):
    """Schema for partially updating a property. All fields optional."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    location: str | None = Field(None, min_length=1, max_length=255)
    property_type: str | None = Field(None, pattern=PROPERTY_TYPE_PATTERN)
    price_per_night: Decimal | None = Field(None, gt=0)
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    max_guests: int | None = Field(None, ge=0)
    amenities: list[str] | None = None
    images: list[str] | None = None
    available_from: date | None = None
    available_to: date | None = None

    @model_validator(mode="after")
    def check_required_not_null(self) -> "PropertyUpdate":
        """Fields backed by NOT NULL columns may be omitted but not cleared."""
        cleared = sorted(
            name for name in self.model_fields_set & _REQUIRED_ON_UPDATE if getattr(self, name) is None
        )
        if cleared:
            raise ValueError(f"Fields cannot be null: {', '.join(cleared)}")
        return self

    @model_validator(mode="after")
    def check_window(self) -> "PropertyUpdate":
        """If both window bounds are provided, validate their order."""
        if (
            self.available_from is not None
            and self.available_to is not None
            and self.available_from > self.available_to
        ):
            raise ValueError("available_from must not be after available_to")
        return self


class QuoteRequest(BaseModel):
    """Stay dates for a price quote."""

    check_in: date
    check_out: date


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PropertyResponse(BaseModel):
    """Public property information returned from the API."""

    id: uuid.UUID
    title: str
    description: str
    location: str
    property_type: str | None = None
    price_per_night: Decimal
    bedrooms: int
    bathrooms: int
    max_guests: int
    amenities: list[str] = []
    images: list[str] = []
    available_from: date | None = None
    available_to: date | None = None
    created_by: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyListingResponse(PropertyResponse):
    """Property with its availability as of the request time."""

    is_available: bool
    availability_label: str | None = None


class PropertyListResponse(BaseModel):
    """Paginated list of properties."""

    items: list[PropertyListingResponse]
    total: int


class QuoteResponse(BaseModel):
    """Computed nights and total price for a stay."""

    property_id: uuid.UUID
    check_in: date
    check_out: date
    nights: int
    price_per_night: Decimal
    total_price: Decimal
