"""Field normalizers shared by the entity models.

All functions are pure: they take the raw value and return the normalized one or
raise ValidationError.
"""

import re
from datetime import datetime
from typing import Any, List, Optional

from dateutil import parser as date_parser

from app.core.errors import ValidationError

# Permissive RFC 5322 style pattern used for account emails
USER_EMAIL_REGEX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

# Booking emails: dot-separated atoms on both sides, no whitespace, TLD of 2+ letters
BOOKING_EMAIL_REGEX = re.compile(
    r"^[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z]{2,}$"
)

SLUG_REGEX = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

TIME_REGEX = re.compile(r"^(\d{1,2}):(\d{2})(?:\s*([ap]m))?$", re.IGNORECASE)

_DATE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def slugify(title: str) -> str:
    """Derive a lowercase kebab-case slug from a title.

    >>> slugify("  My Amazing Event! ")
    'my-amazing-event'
    """
    slug = title.lower().strip()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def is_valid_slug(value: str) -> bool:
    return bool(SLUG_REGEX.match(value))


def normalize_date(value: Any) -> str:
    """Parse ISO, natural-language or slash-delimited dates into YYYY-MM-DD."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Invalid date. Please provide a valid date string", field="date")

    # Parts missing from the input are filled from the default; two different
    # defaults disagree unless year, month and day were all given
    try:
        first = date_parser.parse(value.strip(), default=_DATE_DEFAULTS[0]).date()
        second = date_parser.parse(value.strip(), default=_DATE_DEFAULTS[1]).date()
    except (ValueError, OverflowError):
        raise ValidationError("Invalid date. Please provide a valid date string", field="date")

    if first != second:
        raise ValidationError("Invalid date. Please provide a full date with year, month and day", field="date")
    return first.isoformat()


def normalize_time(value: Any) -> str:
    """Normalize 24-hour H:MM or 12-hour H:MM AM/PM input into zero-padded HH:MM."""
    if not isinstance(value, str):
        raise ValidationError("Invalid time format. Use HH:MM or HH:MM AM/PM", field="time")

    match = TIME_REGEX.match(value.strip())
    if not match:
        raise ValidationError("Invalid time format. Use HH:MM or HH:MM AM/PM", field="time")

    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = match.group(3)

    if minutes > 59:
        raise ValidationError("Invalid time. Minutes must be between 00 and 59", field="time")

    if period:
        if hours < 1 or hours > 12:
            raise ValidationError("Invalid time. Hours must be between 1 and 12 for AM/PM", field="time")
        period = period.upper()
        if period == "AM" and hours == 12:
            hours = 0
        elif period == "PM" and hours != 12:
            hours += 12
    elif hours > 23:
        raise ValidationError("Invalid time. Hours must be between 00 and 23", field="time")

    return f"{hours:02d}:{minutes:02d}"


def normalize_user_email(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Email is required", field="email")
    email = value.strip().lower()
    if not USER_EMAIL_REGEX.match(email):
        raise ValidationError("Please provide a valid email address", field="email")
    return email


def normalize_booking_email(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Email is required", field="email")
    email = value.strip().lower()
    if not BOOKING_EMAIL_REGEX.match(email):
        raise ValidationError("Please provide a valid email address", field="email")
    return email


def clean_string(
    value: Any,
    field: str,
    *,
    min_length: int = 1,
    max_length: Optional[int] = None,
) -> str:
    """Trim a required string and check its length."""
    label = field.replace("_", " ").capitalize()
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{label} is required", field=field)
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string", field=field)

    cleaned = value.strip()
    if len(cleaned) < min_length:
        raise ValidationError(f"{label} must be at least {min_length} characters", field=field)
    if max_length is not None and len(cleaned) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters", field=field)
    return cleaned


def clean_string_list(value: Any, field: str, *, unique: bool = False) -> List[str]:
    """Validate a non-empty list of strings, trimming items and dropping blanks."""
    label = field.capitalize()
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{label} must be a list of strings", field=field)

    items: List[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValidationError(f"{label} must be a list of strings", field=field)
        item = item.strip()
        if not item or (unique and item in items):
            continue
        items.append(item)

    if not items:
        raise ValidationError(f"At least one {field.rstrip('s')} item is required", field=field)
    return items
