# File: app/models/event.py
from sqlalchemy import JSON, Column, Enum, String, Text
from sqlalchemy.orm import relationship, validates
import enum

from app.core.errors import ValidationError
from app.core.validators import (
    clean_string,
    clean_string_list,
    normalize_date,
    normalize_time,
    slugify,
)
from app.models.base import BaseModel

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
OVERVIEW_MAX_LENGTH = 500


class EventMode(enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"


class Event(BaseModel):
    __tablename__ = "events"
    __required_fields__ = (
        "title", "slug", "description", "overview", "image", "venue", "location",
        "date", "time", "mode", "audience", "agenda", "organizer", "tags",
    )

    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    slug = Column(String(120), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    overview = Column(Text, nullable=False)
    image = Column(String(500), nullable=False)
    venue = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    date = Column(String(10), index=True, nullable=False)  # YYYY-MM-DD
    time = Column(String(5), nullable=False)  # HH:MM, 24-hour
    mode = Column(
        Enum(EventMode, values_callable=lambda modes: [m.value for m in modes], name="event_mode"),
        nullable=False,
    )
    audience = Column(String(255), nullable=False)
    agenda = Column(JSON, nullable=False)
    organizer = Column(String(255), nullable=False)
    tags = Column(JSON, nullable=False)

    bookings = relationship("Booking", back_populates="event", passive_deletes=True)

    @validates("title")
    def validate_title(self, key, value):
        title = clean_string(value, "title", max_length=TITLE_MAX_LENGTH)
        # Slug follows the title, and only when the title actually changes
        if title != self.title or not self.slug:
            slug = slugify(title)
            if not slug:
                raise ValidationError("Title must contain at least one letter or digit", field="title")
            self.slug = slug
        return title

    @validates("description")
    def validate_description(self, key, value):
        return clean_string(value, "description", max_length=DESCRIPTION_MAX_LENGTH)

    @validates("overview")
    def validate_overview(self, key, value):
        return clean_string(value, "overview", max_length=OVERVIEW_MAX_LENGTH)

    @validates("image", "venue", "location", "audience", "organizer")
    def validate_text_field(self, key, value):
        return clean_string(value, key, max_length=500 if key == "image" else 255)

    @validates("date")
    def validate_date(self, key, value):
        return normalize_date(value)

    @validates("time")
    def validate_time(self, key, value):
        return normalize_time(value)

    @validates("mode")
    def validate_mode(self, key, value):
        if isinstance(value, EventMode):
            return value
        try:
            return EventMode(value)
        except ValueError:
            raise ValidationError("Mode must be either online, offline, or hybrid", field="mode")

    @validates("agenda")
    def validate_agenda(self, key, value):
        return clean_string_list(value, "agenda")

    @validates("tags")
    def validate_tags(self, key, value):
        return clean_string_list(value, "tags", unique=True)

    def __repr__(self) -> str:
        return f"<Event {self.slug}>"
