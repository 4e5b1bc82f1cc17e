# File: app/api/v1/endpoints/profile.py
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core import deps
from app.db.database import get_db
from app.models.user import User

router = APIRouter()


@router.get("/", response_model=schemas.User)
def read_profile(current_user: User = Depends(deps.get_current_user)) -> Any:
    return current_user


@router.patch("/", response_model=schemas.User)
def update_profile(
    *,
    db: Session = Depends(get_db),
    profile_in: schemas.UserProfileUpdate,
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Update the signed-in user's name and email."""
    return crud.user.update_profile(db, db_obj=current_user, obj_in=profile_in)
