"""SQLAlchemy models for StayPoint.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from staypoint.models.booking import Booking
from staypoint.models.property import Property
from staypoint.models.user import User

__all__ = [
    "Booking",
    "Property",
    "User",
]
