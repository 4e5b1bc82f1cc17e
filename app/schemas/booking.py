# File: app/schemas/booking.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from app.schemas.event import EventSummary

class BookingCreate(BaseModel):
    event_id: int
    email: str

class BookingUpdate(BaseModel):
    event_id: int

class Booking(BaseModel):
    id: int
    event_id: int
    email: str
    user_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class BookingWithEvent(Booking):
    event: Optional[EventSummary] = None
