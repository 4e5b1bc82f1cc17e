# File: app/models/booking.py
from sqlalchemy import Column, ForeignKey, Index, Integer, String, UniqueConstraint, event, inspect, select
from sqlalchemy.orm import relationship, validates

from app.core.errors import ValidationError
from app.core.validators import normalize_booking_email
from app.models.base import BaseModel
from app.models.event import Event


class Booking(BaseModel):
    __tablename__ = "bookings"
    __required_fields__ = ("event_id", "email")
    __table_args__ = (
        # One booking per email per event; the store rejects concurrent duplicates
        UniqueConstraint("event_id", "email", name="uq_bookings_event_email"),
        Index("ix_bookings_event_created", "event_id", "created_at"),
    )

    event_id = Column(Integer, ForeignKey("events.id", ondelete="RESTRICT"), index=True, nullable=False)
    email = Column(String(255), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)

    event = relationship("Event", back_populates="bookings")
    user = relationship("User", back_populates="bookings")

    @validates("email")
    def validate_email(self, key, value):
        return normalize_booking_email(value)

    @validates("event_id")
    def validate_event_id(self, key, value):
        if value is None:
            raise ValidationError("Event is required", field="event_id")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError("Invalid event id", field="event_id")

    def __repr__(self) -> str:
        return f"<Booking {self.email} -> event {self.event_id}>"


def _ensure_event_exists(connection, target: Booking) -> None:
    found = connection.execute(select(Event.id).where(Event.id == target.event_id)).first()
    if found is None:
        raise ValidationError("referenced event does not exist", field="event_id")


@event.listens_for(Booking, "before_insert")
def _check_event_on_insert(mapper, connection, target: Booking) -> None:
    if target.event_id is not None:
        _ensure_event_exists(connection, target)


@event.listens_for(Booking, "before_update")
def _check_event_on_update(mapper, connection, target: Booking) -> None:
    if inspect(target).attrs.event_id.history.has_changes():
        _ensure_event_exists(connection, target)
