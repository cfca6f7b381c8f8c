"""Follow-up documents and notices owed after a booking is submitted."""

import enum

from staypoint.booking.visa import VisaPosture, is_passport_required


class FollowUp(str, enum.Enum):
    BOOKING_CONFIRMATION = "booking_confirmation"
    BOOKING_RECEIPT = "booking_receipt"
    VISA_INVITATION_LETTER = "visa_invitation_letter"


def required_follow_ups(posture: VisaPosture | str, wants_invitation_letter: bool) -> tuple[FollowUp, ...]:
    """Return the follow-ups a new booking requires, in dispatch order."""
    actions = [FollowUp.BOOKING_CONFIRMATION, FollowUp.BOOKING_RECEIPT]
    if is_passport_required(posture, wants_invitation_letter):
        actions.append(FollowUp.VISA_INVITATION_LETTER)
    return tuple(actions)
