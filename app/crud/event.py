# File: app/crud/event.py
from typing import Any, Dict, List, Optional, Union
import logging

from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.core.permissions import can_delete_event
from app.crud.base import CRUDBase
from app.models.booking import Booking
from app.models.event import Event
from app.schemas.event import EventCreate, EventUpdate

logger = logging.getLogger(__name__)


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):
    conflict_message = "An event with this title already exists (duplicate slug)"
    resource_name = "Event"

    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Event]:
        return db.query(Event).filter(Event.slug == slug.strip()).first()

    def create(self, db: Session, *, obj_in: Union[EventCreate, Dict[str, Any]]) -> Event:
        event_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        # Slug is always derived from the title
        event_data = {k: v for k, v in event_data.items() if k != "slug"}
        db_obj = Event(**event_data)
        event = self.save(db, db_obj)
        logger.info(f"Event created: {event.slug}")
        return event

    def update(
        self,
        db: Session,
        *,
        db_obj: Event,
        obj_in: Union[EventUpdate, Dict[str, Any]]
    ) -> Event:
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        update_data = {k: v for k, v in update_data.items() if k != "slug"}
        return super().update(db, db_obj=db_obj, obj_in=update_data)

    def count_bookings(self, db: Session, *, event_id: int) -> int:
        return db.query(Booking).filter(Booking.event_id == event_id).count()

    def remove(self, db: Session, *, id: int) -> Event:
        event = self.get_or_404(db, id)
        booking_count = self.count_bookings(db, event_id=event.id)
        if not can_delete_event(booking_count):
            plural = "s" if booking_count > 1 else ""
            raise ConflictError(
                "Cannot delete event with existing bookings. "
                f"This event has {booking_count} booking{plural}."
            )
        removed = super().remove(db, id=id)
        logger.info(f"Event deleted: {removed.slug}")
        return removed

    def get_similar(self, db: Session, *, event: Event, limit: int = 10) -> List[Event]:
        """Other events sharing at least one tag with the given event.

        Tags are a JSON list, so matching scans (id, tags) of every other event
        and loads only the matches in full.
        """
        if not event.tags:
            return []
        tags = set(event.tags)
        candidates = (
            db.query(Event.id, Event.tags)
            .filter(Event.id != event.id)
            .order_by(Event.created_at.desc(), Event.id.desc())
            .all()
        )
        matching_ids = [event_id for event_id, other_tags in candidates if tags.intersection(other_tags or [])][:limit]
        if not matching_ids:
            return []
        by_id = {other.id: other for other in db.query(Event).filter(Event.id.in_(matching_ids)).all()}
        return [by_id[event_id] for event_id in matching_ids]


event = CRUDEvent(Event)
