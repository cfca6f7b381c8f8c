"""Unit tests for booking request validation."""

from dataclasses import replace
from datetime import date

import pytest

from staypoint.booking import BookingRequest, BookingValidationError, VisaPosture, validate_booking

VALID = BookingRequest(
    guest_name="Ama Owusu",
    guest_email="ama@example.com",
    guest_phone="+233 (20) 123-4567",
    check_in=date(2024, 3, 1),
    check_out=date(2024, 3, 4),
)

INVITATION = replace(
    VALID,
    visa_posture=VisaPosture.NEEDS_HELP,
    wants_invitation_letter=True,
    passport_number="A12345678",
    passport_country="United States",
    passport_expiry=date(2027, 1, 1),
)


class TestValidRequests:
    def test_plain_request_passes(self):
        result = validate_booking(VALID)
        assert result.ok
        assert result.errors == {}

    def test_invitation_request_with_passport_passes(self):
        assert validate_booking(INVITATION).ok

    def test_needs_help_without_letter_skips_passport(self):
        request = replace(VALID, visa_posture=VisaPosture.NEEDS_HELP, wants_invitation_letter=False)
        assert validate_booking(request).ok

    def test_raise_for_errors_is_silent_when_ok(self):
        validate_booking(VALID).raise_for_errors()


class TestGuestFields:
    def test_short_name(self):
        result = validate_booking(replace(VALID, guest_name=" A "))
        assert set(result.errors) == {"guest_name"}

    def test_blank_name(self):
        result = validate_booking(replace(VALID, guest_name="   "))
        assert result.field_errors["guest_name"].kind == "missing_required_field"

    @pytest.mark.parametrize(
        "email",
        [
            "not-an-email",
            "a@b",
            "a b@c.com",
            "@example.com",
            "a@b..com",
            "a@.example.com",
            "a..b@example.com",
            "a@-x.com",
        ],
    )
    def test_bad_email(self, email):
        result = validate_booking(replace(VALID, guest_email=email))
        assert set(result.errors) == {"guest_email"}

    def test_phone_formatting_is_ignored(self):
        assert validate_booking(replace(VALID, guest_phone="(020) 123-45-67")).ok

    def test_phone_with_too_few_digits(self):
        result = validate_booking(replace(VALID, guest_phone="+233-123-45"))
        assert set(result.errors) == {"guest_phone"}


class TestStayDates:
    def test_missing_dates(self):
        result = validate_booking(replace(VALID, check_in=None, check_out=None))
        assert set(result.errors) == {"check_in", "check_out"}

    def test_check_out_before_check_in(self):
        result = validate_booking(replace(VALID, check_out=date(2024, 2, 28)))
        assert set(result.errors) == {"check_out"}
        assert result.field_errors["check_out"].kind == "invalid_date_range"

    def test_same_day(self):
        result = validate_booking(replace(VALID, check_out=VALID.check_in))
        assert "check_out" in result.errors


class TestPassportRules:
    def test_missing_passport_number_only(self):
        result = validate_booking(replace(INVITATION, passport_number=""))
        assert not result.ok
        assert set(result.errors) == {"passport_number"}

    def test_all_passport_fields_missing(self):
        result = validate_booking(
            replace(INVITATION, passport_number=None, passport_country=" ", passport_expiry=None)
        )
        assert set(result.errors) == {"passport_number", "passport_country", "passport_expiry"}

    def test_expiry_on_check_out_is_rejected(self):
        result = validate_booking(replace(INVITATION, passport_expiry=INVITATION.check_out))
        assert set(result.errors) == {"passport_expiry"}
        assert result.field_errors["passport_expiry"].kind == "invalid_passport_expiry"

    def test_expiry_after_check_out_is_accepted(self):
        assert validate_booking(replace(INVITATION, passport_expiry=date(2024, 3, 5))).ok

    def test_passport_ignored_when_not_required(self):
        request = replace(VALID, visa_posture=VisaPosture.HAS_VISA, passport_expiry=date(2000, 1, 1))
        assert validate_booking(request).ok


class TestAggregation:
    def test_reports_every_failure_at_once(self):
        request = BookingRequest(
            guest_name="",
            guest_email="nope",
            guest_phone="123",
            check_in=date(2024, 3, 4),
            check_out=date(2024, 3, 1),
            visa_posture=VisaPosture.NEEDS_HELP,
            wants_invitation_letter=True,
        )
        result = validate_booking(request)
        assert set(result.errors) == {
            "guest_name",
            "guest_email",
            "guest_phone",
            "check_out",
            "passport_number",
            "passport_country",
            "passport_expiry",
        }

    def test_raise_for_errors(self):
        result = validate_booking(replace(VALID, guest_email="bad"))
        with pytest.raises(BookingValidationError) as exc_info:
            result.raise_for_errors()
        assert exc_info.value.errors == {"guest_email": "Invalid email address"}

    def test_is_idempotent(self):
        assert validate_booking(INVITATION) == validate_booking(INVITATION)
