"""Outgoing email."""

from __future__ import annotations

import smtplib
from urllib.parse import urlencode

from flask import current_app, render_template_string
from flask_mail import Mail, Message

from utils.errors import MailDeliveryError


mail = Mail()

verification_template = """<!DOCTYPE html>
<html lang="en">
<body style="font-family: Arial, sans-serif;">
    <h2>Welcome to Bellavista</h2>
    <p>Please verify your email address by clicking the link below:</p>
    <a href="{{ verify_url }}"
       style="background:#E3C08D;padding:10px 20px;color:black;border-radius:5px;text-decoration:none;">
        Verify Email
    </a>
    <p>This link will expire in {{ ttl_minutes }} minutes.</p>
</body>
</html>
"""


def build_verify_url(token: str) -> str:
    base_url = current_app.config["APP_BASE_URL"].rstrip("/")
    return f"{base_url}/verify?{urlencode({'token': token})}"


def send_verification_email(email: str, token: str) -> None:
    """Send the verification link to ``email``.

    Transport failures are raised as ``MailDeliveryError``.
    """

    ttl = current_app.config["VERIFICATION_TOKEN_TTL"]
    msg = Message("Verify your email - Bellavista", recipients=[email])
    msg.html = render_template_string(
        verification_template,
        verify_url=build_verify_url(token),
        ttl_minutes=int(ttl.total_seconds() // 60),
    )
    try:
        mail.send(msg)
    except (smtplib.SMTPException, OSError) as exc:
        current_app.logger.error("Verification email to %s failed: %s", email, exc)
        raise MailDeliveryError(
            "Verification email could not be sent.", detail=str(exc)
        ) from exc
