"""Alert model definition."""

from . import db, utcnow


ALERT_TYPES = ("PENDING_RESERVATION", "LOW_OCCUPANCY", "HIGH_DEMAND", "GENERAL")


class Alert(db.Model):
    """A notification raised by reservation activity."""

    __tablename__ = "alerts"

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(
        db.Enum(*ALERT_TYPES, name="alert_type"),
        nullable=False,
        default="GENERAL",
    )
    message = db.Column(db.Text, nullable=False)
    read = db.Column(db.Boolean, nullable=False, default=False, index=True)
    for_admin = db.Column(db.Boolean, nullable=False, default=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    @classmethod
    def admin_scope(cls, alert_id: int | None = None):
        """Query restricted to admin-facing alerts, optionally a single one."""

        query = cls.query.filter(cls.for_admin.is_(True))
        if alert_id is not None:
            query = query.filter(cls.id == alert_id)
        return query

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "message": self.message,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "read": self.read,
        }

    def __repr__(self) -> str:
        return f"<Alert id={self.id} type={self.type} read={self.read}>"
