"""User model definition."""

from datetime import datetime, timedelta

from werkzeug.security import check_password_hash, generate_password_hash

from . import db, utcnow


CLIENT = "CLIENT"
AGENT = "AGENT"
ADMIN = "ADMIN"
ROLES = (CLIENT, AGENT, ADMIN)


class User(db.Model):
    """Represents a guest or staff account."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(32), nullable=True)
    role = db.Column(
        db.Enum(*ROLES, name="user_role"),
        nullable=False,
        default=CLIENT,
        server_default=db.text("'CLIENT'"),
    )
    is_email_verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    verification_token = db.Column(db.String(128), unique=True, nullable=True, index=True)
    token_expiry = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return check_password_hash(self.password_hash, password)

    def set_verification_token(self, token: str, ttl: timedelta) -> None:
        """Attach a fresh verification token expiring after ``ttl``."""

        self.verification_token = token
        self.token_expiry = utcnow() + ttl

    def verification_expired(self, now: datetime | None = None) -> bool:
        if self.token_expiry is None:
            return False
        return (now or utcnow()) > self.token_expiry

    def to_dict(self) -> dict:
        """Serialize the public fields of the user."""

        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "phone": self.phone,
            "role": self.role,
            "isEmailVerified": self.is_email_verified,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
