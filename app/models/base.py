# File: app/models/base.py
from datetime import datetime, timezone
from typing import Tuple

from sqlalchemy import Column, DateTime, Integer, event

from app.core.errors import ValidationError
from app.db.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    __abstract__ = True

    # Fields that must be present before the row is written, checked in before_insert/update
    __required_fields__: Tuple[str, ...] = ()

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def check_required_fields(self) -> None:
        for field in self.__required_fields__:
            value = getattr(self, field, None)
            if value is None or value == "" or value == []:
                label = field.replace("_id", "").replace("_", " ").capitalize()
                raise ValidationError(f"{label} is required", field=field)


@event.listens_for(BaseModel, "before_insert", propagate=True)
@event.listens_for(BaseModel, "before_update", propagate=True)
def _check_required_fields(mapper, connection, target: BaseModel) -> None:
    target.check_required_fields()


@event.listens_for(BaseModel, "before_insert", propagate=True)
def _stamp_new_row(mapper, connection, target: BaseModel) -> None:
    # A new row is created and last updated at the same instant
    if target.created_at is None:
        target.created_at = utcnow()
    if target.updated_at is None:
        target.updated_at = target.created_at
