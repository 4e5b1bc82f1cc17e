# File: app/api/v1/endpoints/auth.py
from datetime import timedelta
from typing import Any
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core import deps, security
from app.core.config import settings
from app.core.errors import UnauthorizedError
from app.db.database import get_db
from app.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(get_db),
    user_in: schemas.UserCreate
) -> Any:
    """Register a new account with the default user role."""
    return crud.user.create(db, obj_in=user_in)


@router.post("/login", response_model=schemas.Token)
def login_access_token(
    db: Session = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends()
) -> Any:
    """OAuth2 compatible token login (username is the account email)"""
    user = crud.user.authenticate(db, email=form_data.username, password=form_data.password)
    if not user:
        logger.info(f"Failed login for {form_data.username}")
        raise UnauthorizedError("Invalid email or password")

    access_token = security.create_access_token(
        subject=user.id,
        role=user.role.value,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user_id": user.id,
        "role": user.role.value,
    }


@router.get("/me", response_model=schemas.User)
def read_current_user(current_user: User = Depends(deps.get_current_user)) -> Any:
    return current_user
