"""Client self-service blueprint."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.user import CLIENT, User
from routes.auth import MIN_PASSWORD_LENGTH
from security.guards import current_identity, require_role
from utils.errors import InternalError, NotFoundError, ValidationError
from utils.request_validation import parse_json_request

client_bp = Blueprint("client", __name__)


@client_bp.route("/profile/change-password", methods=["POST"])
@require_role(CLIENT)
def change_password():
    """Replace the signed-in client's password after checking the current one."""

    payload = parse_json_request(
        request,
        required_keys=("currentPassword", "newPassword"),
        missing_message="Current and new passwords are required",
        key="message",
    )
    current_password = payload["currentPassword"]
    new_password = payload["newPassword"]
    if not isinstance(current_password, str) or not isinstance(new_password, str):
        raise ValidationError("Current and new passwords are required", key="message")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
            key="message",
        )

    user_id = current_identity().id
    try:
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found", key="message")
        if not user.check_password(current_password):
            current_app.logger.info("Password change rejected for user %s", user_id)
            raise ValidationError("Incorrect current password", key="message")

        user.set_password(new_password)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Changing password failed (user: %s)", user_id)
        raise InternalError("Error changing password", detail=str(exc)) from exc

    current_app.logger.info("Password changed for user %s", user_id)
    return jsonify({"message": "Password updated successfully"})
