"""Seed the administrator and agent accounts."""

from __future__ import annotations

import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app  # noqa: E402
from models import db  # noqa: E402
from models.user import ADMIN, AGENT, User  # noqa: E402

STAFF_ACCOUNTS = (
    {
        "email": os.getenv("SEED_ADMIN_EMAIL", "admin@bellavista.local"),
        "password": os.getenv("SEED_ADMIN_PASSWORD", "AdminPass123"),
        "name": "Bellavista Admin",
        "role": ADMIN,
    },
    {
        "email": os.getenv("SEED_AGENT_EMAIL", "agent@bellavista.local"),
        "password": os.getenv("SEED_AGENT_PASSWORD", "AgentPass123"),
        "name": "Front Desk Agent",
        "role": AGENT,
    },
)


def upsert_staff(email: str, password: str, name: str, role: str) -> tuple[User, str]:
    """Create or refresh a verified staff account; returns the user and the action taken."""

    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, name=name)
        db.session.add(user)
        action = "created"
    else:
        action = "updated"
    user.role = role
    user.is_email_verified = True
    user.verification_token = None
    user.token_expiry = None
    user.set_password(password)
    return user, action


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        for account in STAFF_ACCOUNTS:
            _, action = upsert_staff(**account)
            print(f"{account['role'].title()} user {action}: {account['email']}")
        db.session.commit()


if __name__ == "__main__":
    main()
