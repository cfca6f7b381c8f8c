"""Shared API dependencies — single import point for all routers.

Re-exports database session and authentication dependencies so that router
modules can import everything they need from one place::

    from staypoint.api.deps import get_db, get_current_user
"""

from staypoint.auth.dependencies import (
    get_admin_user,
    get_current_user,
    get_optional_user,
    is_admin,
)
from staypoint.database import get_db

__all__ = [
    "get_db",
    "get_current_user",
    "get_optional_user",
    "get_admin_user",
    "is_admin",
]
