#!/usr/bin/env python3
"""Create the first admin account, or promote an existing user to admin.

Usage: python create_admin.py <email> <name> <password>
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app.core.errors import DomainError
from app.db.database import Base, SessionLocal, connect
from app.models.user import UserRole
from app import crud, schemas


def create_admin(email: str, name: str, password: str) -> int:
    engine = connect()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal(bind=engine)

    try:
        existing = crud.user.get_by_email(db, email=email)
        if existing:
            if existing.role == UserRole.ADMIN:
                print(f'ℹ️  {existing.email} is already an admin')
            else:
                crud.user.update_role(db, db_obj=existing, role=UserRole.ADMIN)
                print(f'✅ Promoted {existing.email} to admin')
            return 0

        admin = crud.user.create(
            db,
            obj_in=schemas.UserCreate(name=name, email=email, password=password),
            role=UserRole.ADMIN,
        )
        print(f'✅ Admin created: {admin.email}')
        return 0
    except DomainError as e:
        print(f'❌ Error creating admin: {e}')
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(2)
    sys.exit(create_admin(*sys.argv[1:]))
