"""Booking request validation.

Every rule runs independently so a caller sees all problems at once; the
validator never raises. Use :meth:`ValidationResult.raise_for_errors` to turn
a failed result into a :class:`BookingValidationError`.
"""

from dataclasses import dataclass, field
from datetime import date

from email_validator import EmailNotValidError, validate_email

from staypoint.booking.errors import (
    BookingValidationError,
    InvalidDateRange,
    InvalidPassportExpiry,
    MissingRequiredField,
)
from staypoint.booking.visa import VisaPosture, is_passport_required

MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 10

# Error kinds surfaced alongside each reason
INVALID_FORMAT = "invalid_format"


@dataclass(frozen=True)
class BookingRequest:
    """Guest-supplied booking input, before validation."""

    guest_name: str | None
    guest_email: str | None
    guest_phone: str | None
    check_in: date | None
    check_out: date | None
    visa_posture: VisaPosture = VisaPosture.NO_VISA_NEEDED
    wants_invitation_letter: bool = False
    passport_number: str | None = None
    passport_country: str | None = None
    passport_expiry: date | None = None

    @property
    def passport_required(self) -> bool:
        return is_passport_required(self.visa_posture, self.wants_invitation_letter)


@dataclass(frozen=True)
class FieldError:
    """A single failing field: the reason shown to users and its error kind."""

    reason: str
    kind: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`validate_booking`."""

    field_errors: dict[str, FieldError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.field_errors

    @property
    def errors(self) -> dict[str, str]:
        """Map of field name to human-readable reason."""
        return {name: err.reason for name, err in self.field_errors.items()}

    def raise_for_errors(self) -> None:
        """Raise :class:`BookingValidationError` if any rule failed."""
        if not self.ok:
            raise BookingValidationError(self.errors)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _check_guest_name(request: BookingRequest) -> FieldError | None:
    if _blank(request.guest_name):
        return FieldError("Name is required", MissingRequiredField.kind)
    if len(request.guest_name.strip()) < MIN_NAME_LENGTH:
        return FieldError(f"Name must be at least {MIN_NAME_LENGTH} characters", INVALID_FORMAT)
    return None


def _check_guest_email(request: BookingRequest) -> FieldError | None:
    if _blank(request.guest_email):
        return FieldError("Email address is required", MissingRequiredField.kind)
    try:
        validate_email(request.guest_email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return FieldError("Invalid email address", INVALID_FORMAT)
    return None


def _check_guest_phone(request: BookingRequest) -> FieldError | None:
    if _blank(request.guest_phone):
        return FieldError("Phone number is required", MissingRequiredField.kind)
    digits = sum(ch.isdigit() for ch in request.guest_phone)
    if digits < MIN_PHONE_DIGITS:
        return FieldError(f"Phone number must contain at least {MIN_PHONE_DIGITS} digits", INVALID_FORMAT)
    return None


def _check_stay_dates(request: BookingRequest) -> dict[str, FieldError]:
    errors: dict[str, FieldError] = {}
    if request.check_in is None:
        errors["check_in"] = FieldError("Check-in date is required", MissingRequiredField.kind)
    if request.check_out is None:
        errors["check_out"] = FieldError("Check-out date is required", MissingRequiredField.kind)
    if not errors and request.check_out <= request.check_in:
        errors["check_out"] = FieldError("Check-out must be after check-in", InvalidDateRange.kind)
    return errors


def _check_passport(request: BookingRequest) -> dict[str, FieldError]:
    if not request.passport_required:
        return {}

    errors: dict[str, FieldError] = {}
    if _blank(request.passport_number):
        errors["passport_number"] = FieldError(
            "Passport number is required for a visa invitation", MissingRequiredField.kind
        )
    if _blank(request.passport_country):
        errors["passport_country"] = FieldError(
            "Passport issuing country is required for a visa invitation", MissingRequiredField.kind
        )
    if request.passport_expiry is None:
        errors["passport_expiry"] = FieldError(
            "Passport expiry date is required for a visa invitation", MissingRequiredField.kind
        )
    elif request.check_out is not None and request.passport_expiry <= request.check_out:
        errors["passport_expiry"] = FieldError(
            "Passport must remain valid beyond the check-out date", InvalidPassportExpiry.kind
        )
    return errors


def validate_booking(request: BookingRequest) -> ValidationResult:
    """Apply every booking rule and collect all failures."""
    field_errors: dict[str, FieldError] = {}

    for name, check in (
        ("guest_name", _check_guest_name),
        ("guest_email", _check_guest_email),
        ("guest_phone", _check_guest_phone),
    ):
        error = check(request)
        if error is not None:
            field_errors[name] = error

    field_errors.update(_check_stay_dates(request))
    field_errors.update(_check_passport(request))

    return ValidationResult(field_errors=field_errors)
