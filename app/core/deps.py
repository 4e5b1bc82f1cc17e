from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app import crud
from app.db.database import get_db
from app.core.errors import ForbiddenError, UnauthorizedError
from app.core.permissions import is_admin
from app.core.security import decode_token
from app.models.user import User
from app.schemas.auth import TokenData

security = HTTPBearer(auto_error=False)


def _user_from_credentials(
    db: Session,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[User]:
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError()

    subject = payload.get("sub")
    try:
        token_data = TokenData(user_id=int(subject), role=payload.get("role"))
    except (TypeError, ValueError):
        raise UnauthorizedError()

    # Role comes from the store, not the token, so demotions apply immediately
    user = crud.user.get(db, token_data.user_id)
    if user is None:
        raise UnauthorizedError()
    return user


def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> User:
    user = _user_from_credentials(db, credentials)
    if user is None:
        raise UnauthorizedError("Not authenticated")
    return user


def get_optional_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[User]:
    """Current user when a token is sent, None for anonymous visitors."""
    return _user_from_credentials(db, credentials)


def get_current_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    if not is_admin(current_user):
        raise ForbiddenError("Admin access required")
    return current_user
