# File: app/api/v1/endpoints/stats.py
from typing import Any, List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core import deps
from app.db.database import get_db

# Every dashboard endpoint is admin only
router = APIRouter(dependencies=[Depends(deps.get_current_admin)])


@router.get("/overview", response_model=schemas.OverviewStats)
def overview(db: Session = Depends(get_db)) -> Any:
    return crud.stats.get_overview(db)


@router.get("/popular-events", response_model=List[schemas.PopularEvent])
def popular_events(
    db: Session = Depends(get_db),
    limit: int = Query(5, ge=1, le=50)
) -> Any:
    return crud.stats.get_popular_events(db, limit=limit)


@router.get("/upcoming-events", response_model=List[schemas.UpcomingEvent])
def upcoming_events(
    db: Session = Depends(get_db),
    limit: int = Query(5, ge=1, le=50)
) -> Any:
    return crud.stats.get_upcoming_events(db, limit=limit)


@router.get("/recent-bookings", response_model=List[schemas.RecentBooking])
def recent_bookings(
    db: Session = Depends(get_db),
    limit: int = Query(10, ge=1, le=100)
) -> Any:
    return crud.stats.get_recent_bookings(db, limit=limit)


@router.get("/growth", response_model=schemas.GrowthStats)
def growth(db: Session = Depends(get_db)) -> Any:
    """Bookings and sign-ups over the last 7 and 30 days."""
    return crud.stats.get_growth(db)


@router.get("/events", response_model=schemas.EventStats)
def event_stats(db: Session = Depends(get_db)) -> Any:
    return crud.stats.get_event_stats(db)
