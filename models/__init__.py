"""Database initialization and model exports."""

from datetime import UTC, datetime

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime, matching stored columns."""

    return datetime.now(UTC).replace(tzinfo=None)


# Import models to register them with SQLAlchemy metadata.
from .user import User  # noqa: E402,F401
from .alert import Alert  # noqa: E402,F401
from .reservation import Reservation, Room  # noqa: E402,F401

__all__ = [
    "db",
    "User",
    "Alert",
    "Reservation",
    "Room",
]
