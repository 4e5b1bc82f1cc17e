from .base import BaseModel
from .user import User, UserRole
from .event import Event, EventMode
from .booking import Booking

__all__ = ["BaseModel", "User", "UserRole", "Event", "EventMode", "Booking"]
