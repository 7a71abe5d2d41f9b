"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import CLIENT, User  # noqa: E402
from security.tokens import issue_session_token  # noqa: E402


class _TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length-for-hs256"
    APP_BASE_URL = "https://bellavista.test"
    MAIL_DEFAULT_SENDER = ("Bellavista", "no-reply@bellavista.test")
    RATE_LIMIT = "1000 per minute"
    CORS_ORIGINS = "*"


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_TestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def make_user(app: Flask) -> Callable[..., int]:
    """Return a helper that persists a user and returns its id."""

    def _make_user(
        email: str,
        password: str = "Password123",
        role: str = CLIENT,
        *,
        name: str = "Test User",
        phone: str | None = None,
        verified: bool = True,
    ) -> int:
        with app.app_context():
            user = User(
                email=email,
                name=name,
                phone=phone,
                role=role,
                is_email_verified=verified,
            )
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture()
def auth_headers(app: Flask) -> Callable[[int], dict[str, str]]:
    """Return a helper building bearer headers for a stored user."""

    def _auth_headers(user_id: int) -> dict[str, str]:
        with app.app_context():
            user = db.session.get(User, user_id)
            token = issue_session_token(
                {"id": user.id, "email": user.email, "role": user.role, "name": user.name}
            )
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def rollbacks(app: Flask, monkeypatch: pytest.MonkeyPatch) -> list[bool]:
    """Record calls to ``db.session.rollback`` while still rolling back."""

    calls: list[bool] = []
    real_rollback = db.session.rollback

    def _rollback() -> None:
        calls.append(True)
        real_rollback()

    monkeypatch.setattr(db.session, "rollback", _rollback)
    return calls
