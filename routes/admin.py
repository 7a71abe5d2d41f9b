"""Admin blueprint for alerts and the pending reservation queue."""

from __future__ import annotations

import math

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.alert import Alert
from models.reservation import Reservation
from models.user import ADMIN
from security.guards import require_role
from utils.errors import InternalError, NotFoundError, ValidationError
from utils.request_validation import parse_json_request, parse_positive_int

DEFAULT_ALERTS_PER_PAGE = 15
MAX_ALERTS_PER_PAGE = 100

admin_bp = Blueprint("admin", __name__)


def _internal_error(message: str, exc: Exception) -> InternalError:
    db.session.rollback()
    return InternalError(message, detail=str(exc))


def _alert_id(raw: str) -> int:
    # Ids that do not parse cannot match any alert.
    try:
        return int(raw)
    except ValueError:
        raise NotFoundError("Alert not found or not an admin alert.", key="message") from None


def _alert_ordering():
    # Unread first, then newest.
    return (Alert.read.asc(), Alert.created_at.desc(), Alert.id.desc())


@admin_bp.route("/alerts", methods=["GET"])
@require_role(ADMIN)
def list_alerts():
    """Return a page of admin alerts."""

    page = parse_positive_int(request.args, "page", 1)
    limit = parse_positive_int(
        request.args, "limit", DEFAULT_ALERTS_PER_PAGE, maximum=MAX_ALERTS_PER_PAGE
    )
    only_unread = request.args.get("filter") == "unread"

    try:
        query = Alert.admin_scope()
        if only_unread:
            query = query.filter(Alert.read.is_(False))

        total = query.count()
        alerts = (
            query.order_by(*_alert_ordering())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        current_app.logger.exception("Fetching admin alerts failed")
        raise _internal_error("Error fetching alerts", exc) from exc

    return jsonify(
        {
            "alerts": [alert.to_dict() for alert in alerts],
            "totalPages": math.ceil(total / limit),
            "currentPage": page,
            "totalAlerts": total,
        }
    )


@admin_bp.route("/alerts", methods=["POST"])
@require_role(ADMIN)
def mark_all_alerts_read():
    """Mark every unread admin alert as read."""

    try:
        updated = (
            Alert.admin_scope()
            .filter(Alert.read.is_(False))
            .update({Alert.read: True}, synchronize_session=False)
        )
        db.session.commit()
    except SQLAlchemyError as exc:
        current_app.logger.exception("Marking all admin alerts read failed")
        raise _internal_error("Error marking all alerts as read", exc) from exc

    current_app.logger.info("Marked %s admin alerts read", updated)
    return jsonify({"message": "All unread admin alerts marked as read."})


@admin_bp.route("/alerts/<alert_id>", methods=["PUT"])
@require_role(ADMIN)
def update_alert(alert_id: str):
    """Set the read flag of one admin alert."""

    payload = parse_json_request(request, key="message")
    read_status = payload.get("readStatus")
    if not isinstance(read_status, bool):
        raise ValidationError("Invalid readStatus provided.", key="message")
    alert_id = _alert_id(alert_id)

    try:
        updated = Alert.admin_scope(alert_id).update(
            {Alert.read: read_status}, synchronize_session=False
        )
        db.session.commit()
    except SQLAlchemyError as exc:
        current_app.logger.exception("Updating alert failed (id: %s)", alert_id)
        raise _internal_error("Error updating alert status", exc) from exc

    if updated == 0:
        raise NotFoundError("Alert not found or not an admin alert.", key="message")

    return jsonify(
        {"message": f"Alert marked as {'read' if read_status else 'unread'}."}
    )


@admin_bp.route("/alerts/<alert_id>", methods=["DELETE"])
@require_role(ADMIN)
def delete_alert(alert_id: str):
    """Dismiss one admin alert."""

    alert_id = _alert_id(alert_id)

    try:
        deleted = Alert.admin_scope(alert_id).delete(synchronize_session=False)
        db.session.commit()
    except SQLAlchemyError as exc:
        current_app.logger.exception("Deleting alert failed (id: %s)", alert_id)
        raise _internal_error("Error dismissing alert", exc) from exc

    if deleted == 0:
        raise NotFoundError("Alert not found or not an admin alert.", key="message")

    return jsonify({"message": "Alert dismissed successfully."})


@admin_bp.route("/pending-reservations", methods=["GET"])
@require_role(ADMIN)
def pending_reservations():
    """Return pending reservations, oldest booking first."""

    try:
        reservations = (
            Reservation.query.filter(Reservation.status == "PENDING")
            .order_by(Reservation.created_at.asc(), Reservation.id.asc())
            .all()
        )
        payload = [reservation.to_admin_view() for reservation in reservations]
    except SQLAlchemyError as exc:
        current_app.logger.exception("Fetching pending reservations failed")
        raise _internal_error("Error fetching pending reservations", exc) from exc

    return jsonify({"reservations": payload})
