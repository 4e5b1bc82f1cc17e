# File: app/api/v1/endpoints/bookings.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core import deps
from app.core.errors import ForbiddenError
from app.core.permissions import can_cancel_booking, can_view_user_bookings
from app.db.database import get_db
from app.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=schemas.Booking, status_code=status.HTTP_201_CREATED)
def create_booking(
    *,
    db: Session = Depends(get_db),
    booking_in: schemas.BookingCreate,
    current_user: Optional[User] = Depends(deps.get_optional_user)
) -> Any:
    """Book an event. Signed-in users get the booking linked to their account."""
    return crud.booking.create(
        db, obj_in=booking_in, user_id=current_user.id if current_user else None
    )


@router.get("/", response_model=List[schemas.BookingWithEvent])
def list_bookings(
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
    skip: int = 0,
    limit: int = 100
) -> Any:
    """List all bookings (admin only)."""
    return crud.booking.get_multi(db, skip=skip, limit=limit)


@router.get("/user/{user_id}", response_model=List[schemas.BookingWithEvent])
def list_user_bookings(
    *,
    db: Session = Depends(get_db),
    user_id: int,
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Bookings of one user, with event details. Users see only their own."""
    if not can_view_user_bookings(current_user, user_id):
        raise ForbiddenError("You can only view your own bookings")
    return crud.booking.get_by_user(db, user_id=user_id)


@router.delete("/{booking_id}", response_model=schemas.Message)
def cancel_booking(
    *,
    db: Session = Depends(get_db),
    booking_id: int,
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Cancel (delete) a booking. Owners and admins only."""
    booking = crud.booking.get_or_404(db, booking_id)
    if not can_cancel_booking(current_user, booking):
        raise ForbiddenError("You can only cancel your own bookings")

    crud.booking.remove(db, id=booking.id)
    logger.info(f"Booking {booking_id} cancelled by {current_user.email}")
    return {"message": "Booking cancelled successfully"}
