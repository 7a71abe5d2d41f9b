"""Email/password verification against stored hashes."""

from __future__ import annotations

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from models.user import User
from utils.errors import AuthenticationError

# Compared against for unknown emails so both failures cost one hash check.
_DUMMY_HASH = generate_password_hash("bellavista-unknown-account")


def verify_credentials(email: str, password: str) -> dict:
    """Return ``{id, email, role, name}`` for a matching user.

    Raises ``AuthenticationError`` for an unknown email or a wrong password.
    Both cases share the public message; ``reason`` tells them apart in logs.
    """

    user = User.query.filter(User.email == email).one_or_none()
    if user is None:
        check_password_hash(_DUMMY_HASH, password)
        current_app.logger.info("Sign-in rejected for %s: no such user", email)
        raise AuthenticationError("no such user")

    if not user.check_password(password):
        current_app.logger.info("Sign-in rejected for %s: bad credentials", email)
        raise AuthenticationError("bad credentials")

    return {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "name": user.name,
    }
