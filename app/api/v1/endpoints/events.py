# File: app/api/v1/endpoints/events.py
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core import deps
from app.core.errors import NotFoundError, ValidationError
from app.core.validators import is_valid_slug
from app.db.database import get_db
from app.models.event import Event
from app.models.user import User

router = APIRouter()


def _get_event_or_404(db: Session, slug: str) -> Event:
    if not slug or not is_valid_slug(slug.strip()):
        raise ValidationError("Invalid slug format", field="slug")
    event = crud.event.get_by_slug(db, slug=slug)
    if not event:
        raise NotFoundError("Event")
    return event


@router.get("/", response_model=List[schemas.Event])
def list_events(
    *,
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100
) -> Any:
    """List events, newest first (public)."""
    return crud.event.get_multi(db, skip=skip, limit=limit)


@router.post("/", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    *,
    db: Session = Depends(get_db),
    event_in: schemas.EventCreate,
    current_user: User = Depends(deps.get_current_admin)
) -> Any:
    """Create an event; the slug is derived from the title."""
    return crud.event.create(db, obj_in=event_in)


@router.get("/{slug}", response_model=schemas.Event)
def get_event(
    *,
    db: Session = Depends(get_db),
    slug: str
) -> Any:
    return _get_event_or_404(db, slug)


@router.get("/{slug}/similar", response_model=List[schemas.Event])
def get_similar_events(
    *,
    db: Session = Depends(get_db),
    slug: str
) -> Any:
    """Events sharing at least one tag with this one."""
    event = _get_event_or_404(db, slug)
    return crud.event.get_similar(db, event=event)


@router.put("/{slug}", response_model=schemas.Event)
def update_event(
    *,
    db: Session = Depends(get_db),
    slug: str,
    event_in: schemas.EventUpdate,
    current_user: User = Depends(deps.get_current_admin)
) -> Any:
    """Update an event. Changing the title regenerates the slug."""
    event = _get_event_or_404(db, slug)
    return crud.event.update(db, db_obj=event, obj_in=event_in)


@router.delete("/{slug}", response_model=schemas.Message)
def delete_event(
    *,
    db: Session = Depends(get_db),
    slug: str,
    current_user: User = Depends(deps.get_current_admin)
) -> Any:
    """Delete an event that has no bookings."""
    event = _get_event_or_404(db, slug)
    crud.event.remove(db, id=event.id)
    return {"message": "Event deleted successfully"}
