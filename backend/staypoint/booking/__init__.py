"""Booking engine: quotes, visa rules, validation, availability, and stats.

Everything here is pure and synchronous. Callers fetch rows from the database
and hand them in; nothing in this package performs I/O.
"""

from staypoint.booking.availability import availability_label, is_available, window_covers_stay
from staypoint.booking.errors import (
    BookingError,
    BookingValidationError,
    InvalidDateRange,
    InvalidPassportExpiry,
    InvalidPrice,
    MissingRequiredField,
)
from staypoint.booking.follow_ups import FollowUp, required_follow_ups
from staypoint.booking.quote import BookingQuote, compute_quote, count_nights
from staypoint.booking.stats import (
    DashboardSummary,
    PropertyStat,
    aggregate_property_stats,
    summarize_dashboard,
)
from staypoint.booking.validation import BookingRequest, ValidationResult, validate_booking
from staypoint.booking.visa import VisaPosture, is_passport_required

__all__ = [
    "BookingError",
    "BookingQuote",
    "BookingRequest",
    "BookingValidationError",
    "DashboardSummary",
    "FollowUp",
    "InvalidDateRange",
    "InvalidPassportExpiry",
    "InvalidPrice",
    "MissingRequiredField",
    "PropertyStat",
    "ValidationResult",
    "VisaPosture",
    "aggregate_property_stats",
    "availability_label",
    "compute_quote",
    "count_nights",
    "is_available",
    "is_passport_required",
    "required_follow_ups",
    "summarize_dashboard",
    "validate_booking",
    "window_covers_stay",
]
