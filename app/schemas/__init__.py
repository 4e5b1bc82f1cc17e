# File: app/schemas/__init__.py
from .auth import Token, TokenData, Message
from .user import User, UserCreate, UserProfileUpdate, UserRoleChange
from .event import Event, EventCreate, EventUpdate, EventSummary
from .booking import Booking, BookingCreate, BookingUpdate, BookingWithEvent
from .stats import (
    OverviewStats, PopularEvent, UpcomingEvent, RecentBooking,
    GrowthStats, EventStats,
)

__all__ = [
    "Token", "TokenData", "Message",
    "User", "UserCreate", "UserProfileUpdate", "UserRoleChange",
    "Event", "EventCreate", "EventUpdate", "EventSummary",
    "Booking", "BookingCreate", "BookingUpdate", "BookingWithEvent",
    "OverviewStats", "PopularEvent", "UpcomingEvent", "RecentBooking",
    "GrowthStats", "EventStats",
]
