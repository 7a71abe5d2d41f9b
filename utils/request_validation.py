"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Iterable, Mapping

from flask import Request

from utils.errors import ValidationError


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    missing_message: str | None = None,
    key: str = "error",
) -> dict:
    """Return the parsed JSON object body or raise a 400 error.

    ``missing_message`` replaces the generated text listing the absent
    ``required_keys``; blank strings count as absent.
    """

    data = req.get_json(silent=True)
    if data is None:
        raise ValidationError("Request JSON body is required.", key=key)

    if not isinstance(data, dict):
        raise ValidationError("Request JSON payload must be an object.", key=key)

    if required_keys:
        missing = [
            name for name in required_keys
            if data.get(name) is None or not str(data.get(name)).strip()
        ]
        if missing:
            raise ValidationError(
                missing_message
                or "Missing required fields: {}.".format(", ".join(sorted(missing))),
                key=key,
            )

    return data


def parse_positive_int(
    args: Mapping[str, str],
    name: str,
    default: int,
    *,
    maximum: int | None = None,
    key: str = "message",
) -> int:
    """Read a positive integer query parameter, falling back to ``default``."""

    raw = args.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a positive integer.", key=key) from None
    if value < 1:
        raise ValidationError(f"{name} must be a positive integer.", key=key)
    if maximum is not None:
        value = min(value, maximum)
    return value
