"""Tests for the verification token service."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import event, update

from models import db, utcnow
from models.user import User
from services.mailer import mail
from services.verification import consume_verification, issue_verification, resend_verification
from utils.errors import ExpiredError, NotFoundError


def _new_user(email: str = "pending@example.com") -> User:
    user = User(email=email, name="Pending Person")
    user.set_password("Password123")
    db.session.add(user)
    db.session.commit()
    return user


def test_issue_verification_stores_token_and_sends_mail(app):
    with app.app_context():
        user = _new_user()
        with mail.record_messages() as outbox:
            token = issue_verification(user)

        refreshed = db.session.get(User, user.id)
        assert refreshed.verification_token == token
        assert refreshed.token_expiry is not None
        assert refreshed.is_email_verified is False
        assert len(outbox) == 1
        assert token in outbox[0].html


def test_issue_verification_generates_distinct_tokens(app):
    with app.app_context():
        first = issue_verification(_new_user("one@example.com"))
        second = issue_verification(_new_user("two@example.com"))

    assert first != second
    assert len(first) >= 32


def test_consume_marks_verified_and_clears_token(app):
    with app.app_context():
        user = _new_user()
        token = issue_verification(user)

        verified = consume_verification(token)

        assert verified.id == user.id
        refreshed = db.session.get(User, user.id)
        assert refreshed.is_email_verified is True
        assert refreshed.verification_token is None
        assert refreshed.token_expiry is None


def test_consume_is_single_use(app):
    with app.app_context():
        token = issue_verification(_new_user())

        consume_verification(token)
        with pytest.raises(NotFoundError):
            consume_verification(token)


def test_consume_loses_to_concurrent_use_of_same_token(app):
    """A token consumed between the lookup and the update is reported as invalid."""

    with app.app_context():
        user = _new_user()
        token = issue_verification(user)
        user_id = user.id
        session = db.session()

        def _consume_elsewhere(state):
            if state.is_update:
                state.session.connection().execute(
                    update(User.__table__)
                    .where(User.__table__.c.id == user_id)
                    .values(verification_token=None, is_email_verified=True)
                )

        event.listen(session, "do_orm_execute", _consume_elsewhere)
        try:
            with pytest.raises(NotFoundError):
                consume_verification(token)
        finally:
            event.remove(session, "do_orm_execute", _consume_elsewhere)

        refreshed = db.session.get(User, user_id)
        assert refreshed.verification_expired() is False


def test_consume_rejects_expired_token(app):
    with app.app_context():
        user = _new_user()
        token = issue_verification(user)
        user.token_expiry = utcnow() - timedelta(seconds=1)
        db.session.commit()

        with pytest.raises(ExpiredError):
            consume_verification(token)

        refreshed = db.session.get(User, user.id)
        assert refreshed.is_email_verified is False
        assert refreshed.verification_token == token


def test_consume_unknown_token(app):
    with app.app_context():
        _new_user()
        with pytest.raises(NotFoundError):
            consume_verification("does-not-exist")


def test_expiry_follows_configured_ttl(app):
    app.config["VERIFICATION_TOKEN_TTL"] = timedelta(minutes=5)
    with app.app_context():
        user = _new_user()
        before = utcnow()
        issue_verification(user)

        refreshed = db.session.get(User, user.id)
        assert before + timedelta(minutes=4) < refreshed.token_expiry
        assert refreshed.token_expiry <= utcnow() + timedelta(minutes=5)


def test_resend_reissues_only_for_unverified_users(app):
    with app.app_context():
        user = _new_user()
        old_token = issue_verification(user)

        assert resend_verification("pending@example.com") is True
        assert db.session.get(User, user.id).verification_token != old_token

        consume_verification(db.session.get(User, user.id).verification_token)
        assert resend_verification("pending@example.com") is False
        assert resend_verification("ghost@example.com") is False
