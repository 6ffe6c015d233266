import pytest

from portal.db.database import build_engine, build_session_factory, init_schema


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with the full schema."""
    engine = build_engine("sqlite://")
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
