import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["PASSWORD_HASH_METHOD"] = "pbkdf2:sha256:1000"

import pytest
from fastapi.testclient import TestClient

from app import crud, schemas
from app.core.config import settings
from app.core.security import create_access_token
from app.db.database import Base, SessionLocal, connect, reset_connection
from app.main import app
from app.models.user import UserRole

API = settings.API_V1_STR


def event_payload(**overrides):
    payload = {
        "title": "PyCon Nairobi",
        "description": "Two days of talks on the Python ecosystem.",
        "overview": "Community conference for Python developers.",
        "image": "https://images.example.com/pycon.png",
        "venue": "KICC",
        "location": "Nairobi, Kenya",
        "date": "2030-06-15",
        "time": "09:00",
        "mode": "offline",
        "audience": "Developers",
        "agenda": ["Registration", "Keynote", "Talks"],
        "organizer": "Python Nairobi",
        "tags": ["python", "community"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def engine(monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", "sqlite://")
    reset_connection()
    engine = connect()
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    reset_connection()


@pytest.fixture
def db(engine):
    session = SessionLocal(bind=engine)
    yield session
    session.close()


@pytest.fixture
def client(engine):
    # No context manager: the lifespan would dispose the shared engine on exit
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make_user(email="user@example.com", name="Regular User", password="password123", role=UserRole.USER):
        return crud.user.create(
            db,
            obj_in=schemas.UserCreate(name=name, email=email, password=password),
            role=role,
        )
    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", name="Admin User", role=UserRole.ADMIN)


@pytest.fixture
def make_event(db):
    def _make_event(**overrides):
        return crud.event.create(db, obj_in=event_payload(**overrides))
    return _make_event


def auth_headers(user):
    token = create_access_token(subject=user.id, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}
