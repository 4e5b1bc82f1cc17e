from .user import user
from .event import event
from .booking import booking
from . import stats

__all__ = ["user", "event", "booking", "stats"]
