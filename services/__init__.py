"""Account services."""

from .mailer import mail, send_verification_email
from .verification import consume_verification, issue_verification, resend_verification

__all__ = [
    "consume_verification",
    "issue_verification",
    "mail",
    "resend_verification",
    "send_verification_email",
]
