# File: app/crud/booking.py
from typing import List, Optional
import logging

from sqlalchemy.orm import Session, joinedload

from app.crud.base import CRUDBase
from app.models.booking import Booking
from app.schemas.booking import BookingCreate, BookingUpdate

logger = logging.getLogger(__name__)


class CRUDBooking(CRUDBase[Booking, BookingCreate, BookingUpdate]):
    conflict_message = "This email has already booked this event"
    resource_name = "Booking"

    def create(self, db: Session, *, obj_in: BookingCreate, user_id: Optional[int] = None) -> Booking:
        # Event existence is checked by the model on insert; the pair is unique in the store
        db_obj = Booking(event_id=obj_in.event_id, email=obj_in.email, user_id=user_id)
        booking = self.save(db, db_obj)
        logger.info(f"Booking created: {booking.email} -> event {booking.event_id}")
        return booking

    def update_event(self, db: Session, *, db_obj: Booking, event_id: int) -> Booking:
        """Move a booking to another event."""
        return self.update(db, db_obj=db_obj, obj_in={"event_id": event_id})

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.event))
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_by_user(self, db: Session, *, user_id: int) -> List[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.event))
            .filter(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .all()
        )

    def get_by_event(self, db: Session, *, event_id: int) -> List[Booking]:
        return (
            db.query(Booking)
            .filter(Booking.event_id == event_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .all()
        )


booking = CRUDBooking(Booking)
