"""Agent blueprint."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.user import AGENT, CLIENT, User
from security.guards import require_role
from utils.errors import InternalError, ValidationError

CLIENT_SEARCH_LIMIT = 10

agent_bp = Blueprint("agent", __name__)


def _serialize_client(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
    }


@agent_bp.route("/clients/search", methods=["GET"])
@require_role(AGENT)
def search_clients():
    """Find client accounts whose email contains the query, ignoring case."""

    query_text = (request.args.get("email") or "").strip()
    if not query_text:
        raise ValidationError("Email query parameter is required.", key="message")

    try:
        clients = (
            User.query.filter(
                User.role == CLIENT,
                func.lower(User.email).contains(query_text.lower(), autoescape=True),
            )
            .order_by(User.email.asc())
            .limit(CLIENT_SEARCH_LIMIT)
            .all()
        )
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Client search failed (email: %s)", query_text)
        raise InternalError("Error searching for clients", detail=str(exc)) from exc

    return jsonify({"clients": [_serialize_client(client) for client in clients]})
