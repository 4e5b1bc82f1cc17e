from typing import Optional
import logging

from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.crud.base import CRUDBase
from app.models.user import User, UserRole
from app.schemas.user import UserCreate, UserProfileUpdate

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, UserCreate, UserProfileUpdate]):
    conflict_message = "User with this email already exists"
    resource_name = "User"

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.strip().lower()).first()

    def create(self, db: Session, *, obj_in: UserCreate, role: UserRole = UserRole.USER) -> User:
        # Password is hashed by the model when assigned
        db_obj = User(
            name=obj_in.name,
            email=obj_in.email,
            password=obj_in.password,
            image=obj_in.image,
            role=role,
        )
        user = self.save(db, db_obj)
        logger.info(f"User registered: {user.email}")
        return user

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user:
            return None
        if not user.check_password(password):
            return None
        return user

    def update_profile(self, db: Session, *, db_obj: User, obj_in: UserProfileUpdate) -> User:
        """Update own name and email; the email must not belong to someone else."""
        email = obj_in.email.strip().lower()
        taken = db.query(User).filter(User.email == email, User.id != db_obj.id).first()
        if taken:
            raise ConflictError("Email is already in use")
        return self.update(db, db_obj=db_obj, obj_in={"name": obj_in.name, "email": obj_in.email})

    def update_role(self, db: Session, *, db_obj: User, role: UserRole) -> User:
        previous = db_obj.role
        user = self.update(db, db_obj=db_obj, obj_in={"role": role})
        logger.info(f"Role of {user.email} changed from {previous.value} to {role.value}")
        return user

    def count_admins(self, db: Session) -> int:
        return db.query(User).filter(User.role == UserRole.ADMIN).count()


user = CRUDUser(User)
