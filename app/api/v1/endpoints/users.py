# File: app/api/v1/endpoints/users.py
from typing import Any, List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core import deps
from app.core.errors import ForbiddenError
from app.core.permissions import role_change_denial
from app.db.database import get_db
from app.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=List[schemas.User])
def list_users(
    *,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
    skip: int = 0,
    limit: int = 100
) -> Any:
    """List all users (admin only)."""
    return crud.user.get_multi(db, skip=skip, limit=limit)


@router.patch("/{user_id}/role", response_model=schemas.User)
def change_user_role(
    *,
    db: Session = Depends(get_db),
    user_id: int,
    role_in: schemas.UserRoleChange,
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Promote or demote a user, keeping at least one admin."""
    target = crud.user.get_or_404(db, user_id)

    denial = role_change_denial(
        current_user, target, role_in.role, admin_count=crud.user.count_admins(db)
    )
    if denial:
        logger.warning(f"Role change refused for {current_user.email} on {target.email}: {denial}")
        raise ForbiddenError(denial)

    return crud.user.update_role(db, db_obj=target, role=role_in.role)
