"""Role gate for protected endpoints."""

from __future__ import annotations

from functools import wraps
from typing import Callable, Iterable

from flask import g

from security.tokens import SessionIdentity, read_session_token
from utils.errors import AuthorizationError


def authorize(identity: SessionIdentity | None, roles: Iterable[str]) -> bool:
    """Return whether ``identity`` holds one of ``roles``."""

    return identity is not None and identity.role in set(roles)


def require_role(*roles: str) -> Callable:
    """Reject the request with 401 unless the session role is in ``roles``.

    Missing sessions and wrong roles get the same response. The identity is
    kept on ``g`` for the wrapped view.
    """

    if not roles:
        raise ValueError("require_role needs at least one role.")

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = read_session_token()
            if not authorize(identity, roles):
                raise AuthorizationError()
            g.session_identity = identity
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_identity() -> SessionIdentity | None:
    return g.get("session_identity")
