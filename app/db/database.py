# File: app/db/database.py
"""Process-wide database engine cache and request-scoped sessions.

connect() opens the engine once and hands the same instance to every caller.
Callers arriving while the first attempt is still in flight wait on that attempt
instead of opening their own engines. A failed attempt is forgotten so the next
call starts over.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.errors import ConfigurationError, InternalError

logger = logging.getLogger(__name__)

Base = declarative_base()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)

_engine: Optional[Engine] = None
_pending: Optional[Future] = None
_lock = threading.Lock()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _open_engine(database_url: str) -> Engine:
    """Create an engine and prove it can reach the store."""
    engine_kwargs = {"pool_pre_ping": True}
    is_sqlite = database_url.startswith("sqlite")

    if is_sqlite:
        engine_kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            engine_kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **engine_kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        engine.dispose()
        logger.error(f"Database connection failed: {e}")
        raise InternalError("Database is unreachable") from e

    return engine


def connect() -> Engine:
    """Return the cached engine, opening it on first use."""
    global _engine, _pending

    if _engine is not None:
        return _engine

    with _lock:
        if _engine is not None:
            return _engine
        if _pending is None:
            database_url = (settings.DATABASE_URL or "").strip()
            if not database_url:
                raise ConfigurationError(
                    "Please define the DATABASE_URL environment variable inside .env"
                )
            _pending = Future()
            pending = _pending
            owner = True
        else:
            pending = _pending
            owner = False

    if not owner:
        # Re-raises the owner's error if its attempt failed
        return pending.result()

    try:
        engine = _open_engine(database_url)
    except BaseException as e:
        with _lock:
            _pending = None
        pending.set_exception(e)
        raise

    with _lock:
        _engine = engine
        _pending = None
    pending.set_result(engine)

    logger.info(f"Database engine ready ({engine.url.get_backend_name()})")
    return engine


def reset_connection() -> None:
    """Dispose the cached engine so the next connect() starts fresh."""
    global _engine, _pending

    with _lock:
        engine = _engine
        _engine = None
        _pending = None

    if engine is not None:
        engine.dispose()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal(bind=connect())
    try:
        yield db
    finally:
        db.close()
