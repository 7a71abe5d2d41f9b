"""HTTP error kinds raised by the API.

Each kind is a werkzeug ``HTTPException`` so Flask routes it through the
application's JSON error handler. ``key`` selects the field name used for the
human readable text in the response body; the auth endpoints answer with
``error`` while the staff endpoints answer with ``message``.
"""

from __future__ import annotations

from typing import Any

from werkzeug.exceptions import HTTPException


class ApiError(HTTPException):
    """Base class for errors rendered as ``{<key>: description, ...}``."""

    code = 500
    key = "error"

    def __init__(
        self,
        description: str | None = None,
        *,
        key: str | None = None,
        detail: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(description)
        if key is not None:
            self.key = key
        self.detail = detail
        self.extra = extra or {}

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {self.key: self.description}
        if self.detail is not None:
            payload["detail"] = self.detail
        payload.update(self.extra)
        return payload


class ValidationError(ApiError):
    code = 400
    description = "Invalid request."


class AuthenticationError(ApiError):
    """Sign-in failure.

    The public description never says which check failed; ``reason`` keeps
    that for server-side logs.
    """

    code = 401
    description = "Invalid email or password."

    def __init__(self, reason: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.reason = reason


class AuthorizationError(ApiError):
    code = 401
    key = "message"
    description = "Unauthorized"


class NotFoundError(ApiError):
    code = 404
    description = "Not found."


class ExpiredError(ApiError):
    code = 400
    description = "Token expired"


class InternalError(ApiError):
    code = 500
    key = "message"
    description = "Internal server error"


class MailDeliveryError(InternalError):
    """The mail transport refused a message after the related state was committed."""

    key = "error"
    description = "Email could not be sent."
