"""Email verification tokens.

A user moves from unverified to pending once a token is issued and mailed,
and to verified when the token is consumed before it expires. Consumption is
a single conditional UPDATE so a token can be used at most once.
"""

from __future__ import annotations

import secrets

from flask import current_app

from models import db, utcnow
from models.user import User
from services.mailer import send_verification_email
from utils.errors import ExpiredError, NotFoundError

TOKEN_BYTES = 32


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def issue_verification(user: User) -> str:
    """Store a fresh token on ``user``, commit, then email it.

    The token is committed before sending, so a ``MailDeliveryError`` leaves
    the user and token in place for a later resend.
    """

    token = generate_token()
    user.set_verification_token(token, current_app.config["VERIFICATION_TOKEN_TTL"])
    db.session.commit()

    send_verification_email(user.email, token)
    current_app.logger.info("Verification email sent to user %s", user.id)
    return token


def consume_verification(token: str) -> User:
    """Mark the token's owner verified and clear the token.

    Raises ``NotFoundError`` when no user holds the token and ``ExpiredError``
    when it is past its expiry.
    """

    user = User.query.filter(User.verification_token == token).one_or_none()
    if user is None:
        raise NotFoundError("Invalid token")

    now = utcnow()
    updated = User.query.filter(
        User.id == user.id,
        User.verification_token == token,
        User.token_expiry >= now,
    ).update(
        {
            User.is_email_verified: True,
            User.verification_token: None,
            User.token_expiry: None,
            User.updated_at: now,
        },
        synchronize_session=False,
    )

    if updated == 0:
        db.session.rollback()
        if user.verification_expired(now):
            raise ExpiredError()
        # Another request consumed it between the lookup and the update.
        raise NotFoundError("Invalid token")

    db.session.commit()
    current_app.logger.info("Email verified for user %s", user.id)
    return user


def resend_verification(email: str) -> bool:
    """Issue a new token for an unverified user; ``False`` when nothing was sent."""

    user = User.query.filter(User.email == email).one_or_none()
    if user is None or user.is_email_verified:
        current_app.logger.info("Verification resend skipped for %s", email)
        return False
    issue_verification(user)
    return True
