# File: app/schemas/stats.py
from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import datetime

class OverviewStats(BaseModel):
    total_events: int
    total_bookings: int
    total_users: int

class PopularEvent(BaseModel):
    id: int
    title: str
    slug: str
    date: str
    location: str
    booking_count: int

class UpcomingEvent(BaseModel):
    id: int
    title: str
    slug: str
    date: str
    time: str
    location: str

    class Config:
        from_attributes = True

class RecentBookingEvent(BaseModel):
    title: str
    slug: str

class RecentBookingUser(BaseModel):
    name: str
    email: str

class RecentBooking(BaseModel):
    id: int
    email: str
    created_at: datetime
    event: Optional[RecentBookingEvent] = None
    user: Optional[RecentBookingUser] = None

class PeriodCounts(BaseModel):
    weekly: int
    monthly: int

class GrowthStats(BaseModel):
    bookings: PeriodCounts
    users: PeriodCounts

class EventStats(BaseModel):
    upcoming: int
    past: int
    by_mode: Dict[str, int]
