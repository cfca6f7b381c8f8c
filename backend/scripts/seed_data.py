"""Seed the database with sample listings, an admin account and bookings.

Every sample booking goes through the booking engine's validator and quote,
so seeded totals match what the API would compute.

Run from the backend directory:
    python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete, select

from staypoint.auth.passwords import hash_password
from staypoint.booking import BookingRequest, VisaPosture, compute_quote, is_passport_required, validate_booking
from staypoint.database import async_session_factory
from staypoint.models.booking import Booking
from staypoint.models.property import Property
from staypoint.models.user import User

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

ADMIN_USER = {
    "email": "admin@staypoint.example",
    "password": "admin1234",
    "name": "StayPoint Admin",
}

PROPERTIES = [
    {
        "title": "Airport Residential Apartment",
        "description": "Two-bedroom serviced apartment ten minutes from Kotoka International Airport.",
        "location": "Airport Residential, Accra",
        "property_type": "apartment",
        "price_per_night": Decimal("95.00"),
        "bedrooms": 2,
        "bathrooms": 2,
        "max_guests": 4,
        "amenities": ["wifi", "ac", "kitchen", "parking"],
    },
    {
        "title": "East Legon Family House",
        "description": "Gated four-bedroom house with a garden and backup power.",
        "location": "East Legon, Accra",
        "property_type": "house",
        "price_per_night": Decimal("180.00"),
        "bedrooms": 4,
        "bathrooms": 3,
        "max_guests": 8,
        "amenities": ["wifi", "ac", "kitchen", "parking", "tv"],
    },
    {
        "title": "Labadi Beach Villa",
        "description": "Private pool villa a short walk from Labadi Beach.",
        "location": "Labadi, Accra",
        "property_type": "villa",
        "price_per_night": Decimal("260.00"),
        "bedrooms": 3,
        "bathrooms": 3,
        "max_guests": 6,
        "amenities": ["wifi", "ac", "pool", "kitchen"],
    },
    {
        "title": "Cape Coast Castle View Studio",
        "description": "Compact studio overlooking the castle, seasonal availability.",
        "location": "Cape Coast",
        "property_type": "studio",
        "price_per_night": Decimal("55.00"),
        "bedrooms": 1,
        "bathrooms": 1,
        "max_guests": 2,
        "amenities": ["wifi", "ac"],
        "window_days": (-30, 120),
    },
]


def _build_requests(today: date) -> list[tuple[str, BookingRequest]]:
    """Sample bookings keyed by property title. Dates never overlap per property."""
    return [
        (
            "Airport Residential Apartment",
            BookingRequest(
                guest_name="Kwame Mensah",
                guest_email="kwame.mensah@example.com",
                guest_phone="+233 24 123 4567",
                check_in=today + timedelta(days=7),
                check_out=today + timedelta(days=12),
            ),
        ),
        (
            "East Legon Family House",
            BookingRequest(
                guest_name="Sarah Johnson",
                guest_email="sarah.johnson@example.com",
                guest_phone="+1 415 555 0199",
                check_in=today + timedelta(days=20),
                check_out=today + timedelta(days=27),
                visa_posture=VisaPosture.NEEDS_HELP,
                wants_invitation_letter=True,
                passport_number="A12345678",
                passport_country="United States",
                passport_expiry=today + timedelta(days=900),
            ),
        ),
        (
            "East Legon Family House",
            BookingRequest(
                guest_name="Ama Owusu",
                guest_email="ama.owusu@example.com",
                guest_phone="+233 20 987 6543",
                check_in=today + timedelta(days=40),
                check_out=today + timedelta(days=43),
            ),
        ),
        (
            "Labadi Beach Villa",
            BookingRequest(
                guest_name="Lukas Schneider",
                guest_email="lukas.schneider@example.com",
                guest_phone="+49 151 2345 6789",
                check_in=today + timedelta(days=14),
                check_out=today + timedelta(days=18),
                visa_posture=VisaPosture.HAS_VISA,
            ),
        ),
    ]


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Populate the database with sample data.

    Idempotent: if the admin user exists, their properties (and, by cascade,
    the bookings on them) are removed and everything is re-created.
    """
    async with async_session_factory() as session:
        result = await session.execute(select(User).where(User.email == ADMIN_USER["email"]))
        existing_user = result.scalar_one_or_none()

        if existing_user is not None:
            print(f"⚠️  Admin '{ADMIN_USER['email']}' already exists. Deleting and re-seeding...")
            owned = select(Property.id).where(Property.created_by == existing_user.id)
            await session.execute(delete(Booking).where(Booking.property_id.in_(owned)))
            await session.execute(delete(Property).where(Property.created_by == existing_user.id))
            await session.execute(delete(User).where(User.id == existing_user.id))
            await session.flush()

        admin = User(
            email=ADMIN_USER["email"],
            hashed_password=hash_password(ADMIN_USER["password"]),
            name=ADMIN_USER["name"],
            role="admin",
        )
        session.add(admin)
        await session.flush()
        print(f"✅ Created admin user: {admin.email} (id={admin.id})")

        today = date.today()
        by_title: dict[str, Property] = {}
        for prop_data in PROPERTIES:
            data = dict(prop_data)
            window = data.pop("window_days", None)
            if window is not None:
                data["available_from"] = today + timedelta(days=window[0])
                data["available_to"] = today + timedelta(days=window[1])
            prop = Property(created_by=admin.id, **data)
            session.add(prop)
            by_title[prop.title] = prop
            print(f"   🏠 {prop.title} — {prop.location} (${prop.price_per_night}/night)")
        await session.flush()

        booking_count = 0
        for title, request in _build_requests(today):
            validate_booking(request).raise_for_errors()
            prop = by_title[title]
            quote = compute_quote(request.check_in, request.check_out, prop.price_per_night)
            needs_invitation = is_passport_required(request.visa_posture, request.wants_invitation_letter)
            session.add(
                Booking(
                    property_id=prop.id,
                    guest_name=request.guest_name,
                    guest_email=request.guest_email,
                    guest_phone=request.guest_phone,
                    check_in=request.check_in,
                    check_out=request.check_out,
                    total_price=quote.total_price,
                    status="confirmed",
                    visa_posture=request.visa_posture.value,
                    needs_invitation=needs_invitation,
                    passport_number=request.passport_number,
                    passport_country=request.passport_country,
                    passport_expiry=request.passport_expiry,
                )
            )
            booking_count += 1

        await session.flush()
        await session.commit()

        print()
        print("=" * 60)
        print("📊 Seed Summary")
        print("=" * 60)
        print(f"   Admin:      {ADMIN_USER['email']} / {ADMIN_USER['password']}")
        print(f"   Properties: {len(by_title)}")
        print(f"   Bookings:   {booking_count}")
        print("=" * 60)


if __name__ == "__main__":
    asyncio.run(seed())
