"""Room and reservation models."""

from . import db, utcnow


ROOM_TYPES = ("SIMPLE", "DOUBLE", "DOUBLE_CONFORT", "SUITE")
RESERVATION_STATUSES = (
    "PENDING",
    "CONFIRMED",
    "CHECKED_IN",
    "CHECKED_OUT",
    "COMPLETED",
    "CANCELED",
)
DEFAULT_HOTEL_NAME = "Hotel Bellavista"


reservation_rooms = db.Table(
    "reservation_rooms",
    db.Column("reservation_id", db.Integer, db.ForeignKey("reservations.id"), primary_key=True),
    db.Column("room_id", db.Integer, db.ForeignKey("rooms.id"), primary_key=True),
)


class Room(db.Model):
    """A bookable room."""

    __tablename__ = "rooms"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    type = db.Column(db.Enum(*ROOM_TYPES, name="room_type"), nullable=False)
    price_per_night = db.Column(db.Float, nullable=False, default=0.0)

    def __repr__(self) -> str:
        return f"<Room {self.name} ({self.type})>"


class Reservation(db.Model):
    """A client booking covering one or more rooms."""

    __tablename__ = "reservations"

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    status = db.Column(
        db.Enum(*RESERVATION_STATUSES, name="reservation_status"),
        nullable=False,
        default="PENDING",
        server_default=db.text("'PENDING'"),
        index=True,
    )
    check_in = db.Column(db.DateTime, nullable=False)
    check_out = db.Column(db.DateTime, nullable=False)
    num_adults = db.Column(db.Integer, nullable=False, default=1)
    num_children = db.Column(db.Integer, nullable=True)
    total_price = db.Column(db.Float, nullable=False, default=0.0)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    client = db.relationship(
        "User",
        backref=db.backref("reservations", lazy="dynamic"),
    )
    rooms = db.relationship("Room", secondary=reservation_rooms, lazy="selectin")

    @property
    def number_of_guests(self) -> int:
        return self.num_adults + (self.num_children or 0)

    @property
    def hotel_name(self) -> str:
        """Hotel label derived from the first room name, e.g. ``"Bellavista - 101"``."""

        if not self.rooms:
            return DEFAULT_HOTEL_NAME
        return self.rooms[0].name.split("-")[0].strip()

    def to_admin_view(self) -> dict:
        """Serialize the reservation for the admin pending queue."""

        return {
            "id": self.id,
            "clientName": self.client.name,
            "clientEmail": self.client.email,
            "hotelName": self.hotel_name,
            "roomTypes": [room.type for room in self.rooms],
            "checkIn": self.check_in.isoformat(),
            "checkOut": self.check_out.isoformat(),
            "numberOfGuests": self.number_of_guests,
            "totalPrice": self.total_price,
            "bookingDate": self.created_at.isoformat() if self.created_at else None,
            "status": self.status,
        }

    def __repr__(self) -> str:
        return f"<Reservation id={self.id} client_id={self.client_id} status={self.status}>"
