"""Visa posture and passport requirement rules."""

import enum


class VisaPosture(str, enum.Enum):
    """What a guest declared about their visa situation."""

    NO_VISA_NEEDED = "no_visa_needed"
    HAS_VISA = "has_visa"
    NEEDS_HELP = "needs_help"

    @classmethod
    def from_form(cls, has_visa: str | bool, visa_status: str | None = None) -> "VisaPosture":
        """Map the two-step booking form answers onto a posture.

        The form first asks whether a visa is needed at all (``has_visa``),
        then whether the guest already holds one (``visa_status`` of
        ``have_visa`` or ``need_help``).
        """
        needs_visa = has_visa if isinstance(has_visa, bool) else has_visa.strip().lower() == "yes"
        if not needs_visa:
            return cls.NO_VISA_NEEDED
        if visa_status == "need_help":
            return cls.NEEDS_HELP
        return cls.HAS_VISA


def is_passport_required(posture: VisaPosture | str, wants_invitation_letter: bool) -> bool:
    """Return True when passport details are mandatory for a booking.

    Only guests who need help getting a visa *and* asked for an invitation
    letter must supply passport details.
    """
    return VisaPosture(posture) is VisaPosture.NEEDS_HELP and bool(wants_invitation_letter)
