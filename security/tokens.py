"""Session token issuing and reading.

Tokens are flask-jwt-extended access tokens signed with ``JWT_SECRET_KEY``.
Rotating the key invalidates every outstanding session. There is no
server-side revocation; a token stays valid until its ``exp`` claim.
"""

from __future__ import annotations

from typing import NamedTuple

from flask import current_app
from flask_jwt_extended import (
    create_access_token,
    decode_token,
    get_jwt,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from models.user import ROLES


class SessionIdentity(NamedTuple):
    id: int
    role: str
    email: str | None = None
    name: str | None = None


def issue_session_token(identity: dict) -> str:
    """Mint a signed token for the projection returned by ``verify_credentials``."""

    return create_access_token(
        identity=str(identity["id"]),
        additional_claims={
            "role": identity["role"],
            "email": identity.get("email"),
            "name": identity.get("name"),
        },
    )


def _identity_from_claims(claims: dict) -> SessionIdentity | None:
    role = claims.get("role")
    if role not in ROLES:
        return None
    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        return None
    return SessionIdentity(
        id=user_id,
        role=role,
        email=claims.get("email"),
        name=claims.get("name"),
    )


def decode_session_token(raw_token: str) -> SessionIdentity | None:
    """Decode a raw token string; ``None`` when it is invalid or expired."""

    try:
        claims = decode_token(raw_token)
    except (JWTExtendedException, PyJWTError) as exc:
        current_app.logger.debug("Discarding session token: %s", exc)
        return None
    return _identity_from_claims(claims)


def read_session_token() -> SessionIdentity | None:
    """Return the identity carried by the current request's bearer token.

    Missing, malformed, tampered and expired tokens all read as ``None`` so
    callers handle them exactly like an anonymous request.
    """

    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as exc:
        current_app.logger.debug("Discarding session token: %s", exc)
        return None
    claims = get_jwt()
    if not claims:
        return None
    return _identity_from_claims(claims)
