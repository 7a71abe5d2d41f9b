"""Authentication blueprint providing signup, verification and login endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, redirect, request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from models.user import CLIENT, User
from security.credentials import verify_credentials
from security.tokens import issue_session_token
from services.verification import consume_verification, issue_verification, resend_verification
from utils.errors import InternalError, MailDeliveryError, NotFoundError, ValidationError
from utils.request_validation import parse_json_request

MIN_PASSWORD_LENGTH = 8
SIGNUP_FIELDS = ("firstName", "lastName", "email", "password")

auth_bp = Blueprint("auth", __name__)


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _email_taken(email: str) -> bool:
    return User.query.filter(User.email == email).first() is not None


def _validate_signup(payload: dict) -> None:
    password = payload.get("password")
    if not isinstance(password, str):
        raise ValidationError("All fields are required")
    if password != payload.get("verifyPassword"):
        raise ValidationError("Passwords do not match")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


@auth_bp.route("/signup", methods=["POST"])
def signup() -> tuple:
    """Register a client account and email it a verification link."""
    payload = parse_json_request(
        request,
        required_keys=SIGNUP_FIELDS,
        missing_message="All fields are required",
    )
    _validate_signup(payload)
    email = _clean(payload.get("email"))

    try:
        if _email_taken(email):
            raise ValidationError("Email already in use")

        user = User(
            email=email,
            name=f"{_clean(payload.get('firstName'))} {_clean(payload.get('lastName'))}",
            phone=_clean(payload.get("phone")) or None,
            role=CLIENT,
            is_email_verified=False,
        )
        user.set_password(payload["password"])
        db.session.add(user)
        db.session.flush()

        issue_verification(user)
    except MailDeliveryError as exc:
        exc.description = "User created, but the verification email could not be sent."
        exc.extra["user"] = user.to_dict()
        raise
    except IntegrityError as exc:
        # Lost a race with a concurrent signup for the same email.
        db.session.rollback()
        current_app.logger.info("Signup for %s hit the unique email constraint", email)
        raise ValidationError("Email already in use") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Signup failed for %s", email)
        raise InternalError("Internal server error", key="error") from exc

    current_app.logger.info("User %s signed up", user.id)
    return (
        jsonify(
            {
                "message": "User created. Please verify your email.",
                "user": user.to_dict(),
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/verify", methods=["GET"])
def verify_email():
    """Consume a verification token and redirect to the success page."""
    token = _clean(request.args.get("token"))
    if not token:
        raise ValidationError("Token is missing")

    try:
        consume_verification(token)
    except NotFoundError as exc:
        raise ValidationError("Invalid token") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Verification failed")
        raise InternalError("Server error", key="error") from exc

    base_url = current_app.config["APP_BASE_URL"].rstrip("/")
    return redirect(f"{base_url}/verification?success=true")


@auth_bp.route("/verify/resend", methods=["POST"])
def resend() -> tuple:
    """Send a new verification link to an unverified account."""
    payload = parse_json_request(request, required_keys=("email",), missing_message="Email is required")
    try:
        resend_verification(_clean(payload.get("email")))
    except MailDeliveryError:
        # The response is identical whether or not the account exists.
        current_app.logger.warning("Verification resend could not be delivered")
    return (
        jsonify({"message": "If the account exists and is unverified, a new link has been sent."}),
        HTTPStatus.OK,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a session token."""
    payload = parse_json_request(
        request,
        required_keys=("email", "password"),
        missing_message="Email and password are required",
    )
    identity = verify_credentials(_clean(payload.get("email")), str(payload["password"]))
    token = issue_session_token(identity)
    return (
        jsonify({"access_token": token, "user": identity}),
        HTTPStatus.OK,
    )
