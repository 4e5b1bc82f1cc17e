# File: app/crud/stats.py
"""Read-only aggregates for the admin dashboard."""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.models.booking import Booking
from app.models.event import Event, EventMode
from app.models.user import User


def _today() -> str:
    return date.today().isoformat()


def get_overview(db: Session) -> Dict[str, int]:
    return {
        "total_events": db.query(Event).count(),
        "total_bookings": db.query(Booking).count(),
        "total_users": db.query(User).count(),
    }


def get_popular_events(db: Session, *, limit: int = 5) -> List[Dict[str, Any]]:
    booking_count = func.count(Booking.id).label("booking_count")
    rows = (
        db.query(Event, booking_count)
        .outerjoin(Booking, Booking.event_id == Event.id)
        .group_by(Event.id)
        .order_by(booking_count.desc(), Event.id.asc())
        .limit(limit)
        .all()
    )
    return [
        {
            "id": event.id,
            "title": event.title,
            "slug": event.slug,
            "date": event.date,
            "location": event.location,
            "booking_count": count,
        }
        for event, count in rows
    ]


def get_upcoming_events(db: Session, *, limit: int = 5, today: Optional[str] = None) -> List[Event]:
    # Dates are stored as YYYY-MM-DD so string order is calendar order
    return (
        db.query(Event)
        .filter(Event.date >= (today or _today()))
        .order_by(Event.date.asc(), Event.time.asc())
        .limit(limit)
        .all()
    )


def get_recent_bookings(db: Session, *, limit: int = 10) -> List[Dict[str, Any]]:
    bookings = (
        db.query(Booking)
        .options(joinedload(Booking.event), joinedload(Booking.user))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .limit(limit)
        .all()
    )
    return [
        {
            "id": b.id,
            "email": b.email,
            "created_at": b.created_at,
            "event": {"title": b.event.title, "slug": b.event.slug} if b.event else None,
            "user": {"name": b.user.name, "email": b.user.email} if b.user else None,
        }
        for b in bookings
    ]


def get_growth(db: Session, *, now: Optional[datetime] = None) -> Dict[str, Dict[str, int]]:
    now = now or datetime.now(timezone.utc)
    last_week = now - timedelta(days=7)
    last_month = now - timedelta(days=30)
    return {
        "bookings": {
            "weekly": db.query(Booking).filter(Booking.created_at >= last_week).count(),
            "monthly": db.query(Booking).filter(Booking.created_at >= last_month).count(),
        },
        "users": {
            "weekly": db.query(User).filter(User.created_at >= last_week).count(),
            "monthly": db.query(User).filter(User.created_at >= last_month).count(),
        },
    }


def get_event_stats(db: Session, *, today: Optional[str] = None) -> Dict[str, Any]:
    today = today or _today()
    return {
        "upcoming": db.query(Event).filter(Event.date >= today).count(),
        "past": db.query(Event).filter(Event.date < today).count(),
        "by_mode": {
            mode.value: db.query(Event).filter(Event.mode == mode).count()
            for mode in EventMode
        },
    }
