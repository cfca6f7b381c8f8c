"""Guest documents — booking confirmation and visa invitation letter.

Documents are composed from templates and "sent" by logging them; delivery
and PDF rendering belong to external services.
"""

import logging
from dataclasses import dataclass

from staypoint.booking import count_nights
from staypoint.config import settings
from staypoint.models.booking import Booking

logger = logging.getLogger(__name__)

CONFIRMATION = "confirmation"
VISA_INVITATION = "visa_invitation"

TEMPLATES = {
    CONFIRMATION: {
        "subject": "Booking Confirmation - {property_title}",
        "body": (
            "Dear {guest_name},\n\n"
            "Thank you for booking with {company_name}.\n\n"
            "Guest Details:\n"
            "- Name: {guest_name}\n"
            "- Email: {guest_email}\n"
            "- Phone: {guest_phone}\n\n"
            "Booking Details:\n"
            "- Booking reference: {booking_id}\n"
            "- Property: {property_title}\n"
            "- Location: {location}\n"
            "- Check-in: {check_in}\n"
            "- Check-out: {check_out}\n"
            "- Nights: {nights}\n"
            "- Total Price: ${total_price}\n"
            "{invitation_note}\n"
            "If you have any questions, contact us at {support_email}.\n\n"
            "Best regards,\n{company_name}"
        ),
    },
    VISA_INVITATION: {
        "subject": "Visa Invitation Letter - {property_title}",
        "body": (
            "INVITATION LETTER FOR VISA APPLICATION\n\n"
            "To Whom It May Concern,\n\n"
            "This letter serves as an official invitation for {guest_name} "
            "(Passport Number: {passport_number}, issued by {passport_country}, "
            "valid until {passport_expiry}) to stay at our property for "
            "accommodation purposes.\n\n"
            "Accommodation Details:\n"
            "- Property: {property_title}\n"
            "- Address: {location}\n"
            "- Check-in Date: {check_in}\n"
            "- Check-out Date: {check_out}\n"
            "- Duration of Stay: {nights} nights\n"
            "- Booking reference: {booking_id}\n\n"
            "The guest has made a reservation with us and all accommodation "
            "expenses have been arranged. We guarantee that the guest will be "
            "provided with proper accommodation during their stay.\n\n"
            "Should you require any additional information, please contact "
            "{support_email}.\n\n"
            "Sincerely,\n{company_name}"
        ),
    },
}

VALID_KINDS = set(TEMPLATES)

_INVITATION_NOTE = (
    "\nVisa Invitation Letter:\n"
    "A visa invitation letter will be prepared and sent to you separately within 24 hours.\n"
)


class DocumentNotApplicable(ValueError):
    """The requested document doesn't apply to this booking."""


@dataclass(frozen=True)
class GuestDocument:
    kind: str
    recipient_email: str
    subject: str
    body: str


def compose_document(booking: Booking, kind: str) -> GuestDocument:
    """Render a guest document for ``booking``.

    ``booking.property`` must be loaded.

    Raises:
        ValueError: If ``kind`` is unknown.
        DocumentNotApplicable: For a visa invitation on a booking that
            didn't request one.
    """
    if kind not in VALID_KINDS:
        raise ValueError(f"Invalid document kind '{kind}'. Must be one of: {', '.join(sorted(VALID_KINDS))}")
    if kind == VISA_INVITATION and not booking.needs_invitation:
        raise DocumentNotApplicable("Visa invitation not requested for this booking")

    prop = booking.property
    template_vars = {
        "company_name": settings.company_name,
        "support_email": settings.support_email,
        "booking_id": str(booking.id),
        "guest_name": booking.guest_name,
        "guest_email": booking.guest_email,
        "guest_phone": booking.guest_phone,
        "property_title": prop.title,
        "location": prop.location,
        "check_in": booking.check_in.isoformat(),
        "check_out": booking.check_out.isoformat(),
        "nights": count_nights(booking.check_in, booking.check_out),
        "total_price": booking.total_price if booking.total_price is not None else "N/A",
        "invitation_note": _INVITATION_NOTE if booking.needs_invitation else "",
        "passport_number": booking.passport_number or "N/A",
        "passport_country": booking.passport_country or "N/A",
        "passport_expiry": booking.passport_expiry.isoformat() if booking.passport_expiry else "N/A",
    }

    tmpl = TEMPLATES[kind]
    return GuestDocument(
        kind=kind,
        recipient_email=booking.guest_email,
        subject=tmpl["subject"].format(**template_vars),
        body=tmpl["body"].format(**template_vars),
    )


def dispatch_document(document: GuestDocument) -> str:
    """Simulate delivery of a composed document and return its status."""
    logger.info(
        "Guest document sent [%s] to <%s>: %s",
        document.kind,
        document.recipient_email,
        document.subject,
    )
    return "simulated"
