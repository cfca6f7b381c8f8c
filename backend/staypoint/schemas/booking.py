"""Pydantic v2 request/response schemas for booking endpoints.

``BookingCreate`` deliberately does little validation of its own: the
booking engine's validator reports every failing field at once, which the
router returns as a single 422 response.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from staypoint.booking import FollowUp, VisaPosture
from staypoint.schemas.property import PropertyResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for submitting a new booking.

    The visa posture may be sent directly, or as the booking form's two
    answers (``has_visa`` then ``visa_status``), which are mapped onto a
    posture.
    """

    property_id: uuid.UUID
    guest_name: str | None = None
    guest_email: str | None = None
    guest_phone: str | None = None
    check_in: date | None = None
    check_out: date | None = None
    visa_posture: VisaPosture = VisaPosture.NO_VISA_NEEDED
    has_visa: bool | str | None = None
    visa_status: str | None = Field(None, pattern="^(have_visa|need_help)$")
    needs_invitation: bool = False
    passport_number: str | None = None
    passport_country: str | None = None
    passport_expiry: date | None = None

    @model_validator(mode="after")
    def resolve_form_answers(self) -> "BookingCreate":
        if self.has_visa is None:
            return self
        posture = VisaPosture.from_form(self.has_visa, self.visa_status)
        if "visa_posture" in self.model_fields_set and self.visa_posture is not posture:
            raise ValueError("visa_posture contradicts has_visa/visa_status")
        self.visa_posture = posture
        return self


class BookingStatusUpdate(BaseModel):
    """Admin status change."""

    status: str = Field(..., pattern="^(pending|confirmed|cancelled)$")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Standard booking response."""

    id: uuid.UUID
    user_id: uuid.UUID | None = None
    property_id: uuid.UUID
    guest_name: str
    guest_email: str
    guest_phone: str
    check_in: date
    check_out: date
    total_price: Decimal | None = None
    status: str
    visa_posture: str
    needs_invitation: bool
    passport_number: str | None = None
    passport_country: str | None = None
    passport_expiry: date | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    """Booking with the nested property, used by the confirmation page."""

    property: PropertyResponse | None = None


class BookingCreatedResponse(BaseModel):
    """A newly created booking plus the follow-ups it requires."""

    booking: BookingResponse
    nights: int
    follow_ups: list[FollowUp]


class BookingListResponse(BaseModel):
    """Paginated list of bookings."""

    items: list[BookingDetailResponse]
    total: int


class GuestDocumentResponse(BaseModel):
    """A composed guest document. Delivery is simulated."""

    booking_id: uuid.UUID
    kind: str
    recipient_email: str
    subject: str
    body: str
    status: str = "simulated"
