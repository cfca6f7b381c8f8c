"""Unit tests for guest document composition."""

import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from staypoint.config import settings
from staypoint.services.document_service import (
    CONFIRMATION,
    VISA_INVITATION,
    DocumentNotApplicable,
    compose_document,
    dispatch_document,
)


def _booking(needs_invitation: bool = False) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        guest_name="Sarah Johnson",
        guest_email="sarah@example.com",
        guest_phone="+1 415 555 0199",
        check_in=date(2024, 3, 1),
        check_out=date(2024, 3, 8),
        total_price=Decimal("1260.00"),
        needs_invitation=needs_invitation,
        passport_number="A12345678" if needs_invitation else None,
        passport_country="United States" if needs_invitation else None,
        passport_expiry=date(2027, 5, 1) if needs_invitation else None,
        property=SimpleNamespace(title="East Legon Family House", location="East Legon, Accra"),
    )


class TestConfirmation:
    def test_renders_booking_details(self):
        booking = _booking()
        doc = compose_document(booking, CONFIRMATION)

        assert doc.kind == CONFIRMATION
        assert doc.recipient_email == "sarah@example.com"
        assert doc.subject == "Booking Confirmation - East Legon Family House"
        assert str(booking.id) in doc.body
        assert "Nights: 7" in doc.body
        assert "$1260.00" in doc.body
        assert settings.company_name in doc.body
        assert "Visa Invitation Letter" not in doc.body

    def test_mentions_pending_invitation_letter(self):
        doc = compose_document(_booking(needs_invitation=True), CONFIRMATION)
        assert "Visa Invitation Letter" in doc.body


class TestVisaInvitation:
    def test_renders_passport_details(self):
        doc = compose_document(_booking(needs_invitation=True), VISA_INVITATION)
        assert doc.subject == "Visa Invitation Letter - East Legon Family House"
        assert "Passport Number: A12345678" in doc.body
        assert "issued by United States" in doc.body
        assert "Duration of Stay: 7 nights" in doc.body

    def test_not_requested(self):
        with pytest.raises(DocumentNotApplicable):
            compose_document(_booking(needs_invitation=False), VISA_INVITATION)


def test_unknown_kind():
    with pytest.raises(ValueError, match="Invalid document kind"):
        compose_document(_booking(), "receipt")


def test_dispatch_is_simulated(caplog):
    doc = compose_document(_booking(), CONFIRMATION)
    with caplog.at_level("INFO", logger="staypoint.services.document_service"):
        assert dispatch_document(doc) == "simulated"
    assert "sarah@example.com" in caplog.text
