# File: app/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union
import logging

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from app.core.config import settings
from app.core.errors import InternalError

logger = logging.getLogger(__name__)


def get_password_hash(password: str) -> str:
    try:
        return generate_password_hash(password, method=settings.PASSWORD_HASH_METHOD)
    except (TypeError, ValueError) as e:
        logger.error(f"Password hashing failed: {e}")
        raise InternalError("Password hashing failed") from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time comparison of a candidate password against a stored hash.

    A wrong password returns False; only a broken hash or hashing backend raises.
    """
    try:
        return check_password_hash(hashed_password, plain_password)
    except (TypeError, ValueError) as e:
        logger.error(f"Password comparison failed: {e}")
        raise InternalError("Password comparison failed") from e


def create_access_token(
    subject: Union[str, Any],
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": str(subject), "role": role}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
