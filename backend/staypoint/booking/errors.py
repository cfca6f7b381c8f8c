"""Typed errors raised by the booking engine."""


class BookingError(ValueError):
    """Base class for all booking-engine errors."""

    kind = "booking_error"


class InvalidDateRange(BookingError):
    """Check-out is not after check-in, or an availability window is inverted."""

    kind = "invalid_date_range"


class MissingRequiredField(BookingError):
    """A mandatory field is empty under the applicable rule set."""

    kind = "missing_required_field"

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required")


class InvalidPassportExpiry(BookingError):
    """Passport expires on or before the check-out date."""

    kind = "invalid_passport_expiry"


class InvalidPrice(BookingError):
    """Nightly price is zero or negative."""

    kind = "invalid_price"


class BookingValidationError(BookingError):
    """Raised when a booking request fails one or more validation rules.

    ``errors`` maps each failing field name to a human-readable reason.
    """

    kind = "validation_failed"

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Booking request is invalid: {fields}")
