# File: app/models/user.py
from sqlalchemy import Column, Enum, String
from sqlalchemy.orm import relationship, validates
import enum

from app.core.errors import ValidationError
from app.core.security import get_password_hash, verify_password
from app.core.validators import clean_string, normalize_user_email
from app.models.base import BaseModel

PASSWORD_MIN_LENGTH = 8


class UserRole(enum.Enum):
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    __tablename__ = "users"
    __required_fields__ = ("name", "email", "password")

    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # Stores the hash; assigning a plain password hashes it (see validate_password)
    password = Column(String(255), nullable=False)
    image = Column(String(500), nullable=True)
    role = Column(
        Enum(UserRole, values_callable=lambda roles: [r.value for r in roles], name="user_role"),
        nullable=False,
        default=UserRole.USER,
    )

    bookings = relationship("Booking", back_populates="user", passive_deletes=True)

    @validates("name")
    def validate_name(self, key, value):
        return clean_string(value, "name", min_length=2, max_length=50)

    @validates("email")
    def validate_email(self, key, value):
        return normalize_user_email(value)

    @validates("password")
    def validate_password(self, key, value):
        # Re-assigning the stored hash is not a change
        if value is not None and value == self.password:
            return value
        if not isinstance(value, str) or not value:
            raise ValidationError("Password is required", field="password")
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters", field="password"
            )
        return get_password_hash(value)

    @validates("image")
    def validate_image(self, key, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @validates("role")
    def validate_role(self, key, value):
        if isinstance(value, UserRole):
            return value
        try:
            return UserRole(value)
        except ValueError:
            raise ValidationError("Role must be either user or admin", field="role")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def check_password(self, candidate: str) -> bool:
        """Compare a candidate password with the stored hash."""
        if not self.password or not isinstance(candidate, str):
            return False
        return verify_password(candidate, self.password)

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value if self.role else None})>"
