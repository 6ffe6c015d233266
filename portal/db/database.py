"""
Database engine and session management.

Builds the SQLAlchemy engine for a configured URL. The engine and its session
factory are owned by the application instance (see `portal.api.main`) rather
than living at module scope, so tests and scripts can each build their own.
"""
import logging
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # pragma: no cover - driver hook
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite URLs get FK enforcement and a created parent directory."""
    url = make_url(database_url)
    kwargs = {}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if not url.database or url.database == ":memory:":
            # In-memory SQLite with StaticPool so the schema persists across connections
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(database_url, **kwargs)
    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    logger.info("database_engine: backend=%s database=%s", url.get_backend_name(), url.database)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_schema(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    from portal.db import models  # local import to avoid circular import at module load

    models.Base.metadata.create_all(bind=engine)


def session_scope(session_factory: sessionmaker):
    """Yield a Session and close it when finished."""
    db: Session = session_factory()
    try:
        yield db
    finally:
        db.close()
