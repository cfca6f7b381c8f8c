"""Password hashing with bcrypt."""

import bcrypt

_ENCODING = "utf-8"


def hash_password(password: str) -> str:
    """Return the bcrypt hash of a plain-text password."""
    return bcrypt.hashpw(password.encode(_ENCODING), bcrypt.gensalt()).decode(_ENCODING)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if ``plain_password`` matches ``hashed_password``."""
    return bcrypt.checkpw(plain_password.encode(_ENCODING), hashed_password.encode(_ENCODING))
