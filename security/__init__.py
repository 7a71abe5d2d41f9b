"""Credential checks, session tokens and role guards."""

from .credentials import verify_credentials
from .guards import authorize, current_identity, require_role
from .tokens import SessionIdentity, decode_session_token, issue_session_token, read_session_token

__all__ = [
    "SessionIdentity",
    "authorize",
    "current_identity",
    "decode_session_token",
    "issue_session_token",
    "read_session_token",
    "require_role",
    "verify_credentials",
]
