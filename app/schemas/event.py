# File: app/schemas/event.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from app.models.event import EventMode

class EventBase(BaseModel):
    title: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    agenda: List[str]
    organizer: str
    tags: List[str]

class EventCreate(EventBase):
    pass

class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    overview: Optional[str] = None
    image: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    mode: Optional[str] = None
    audience: Optional[str] = None
    agenda: Optional[List[str]] = None
    organizer: Optional[str] = None
    tags: Optional[List[str]] = None

class Event(EventBase):
    id: int
    slug: str
    mode: EventMode
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class EventSummary(BaseModel):
    """Short event info embedded in bookings and dashboards"""
    id: int
    title: str
    slug: str
    date: str
    time: str
    location: str

    class Config:
        from_attributes = True
