import pytest
from fastapi.testclient import TestClient

from portal.api.main import create_app
from portal.config import Settings

TEST_SECRET = "test-secret"

# Smallest byte strings the upload handlers accept for each kind
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
PDF_BYTES = b"%PDF-1.4\n%test document\n"


def png_file(name: str = "photo.png", content: bytes = PNG_BYTES, mime: str = "image/png"):
    return (name, content, mime)


def pdf_file(name: str = "report.pdf", content: bytes = PDF_BYTES, mime: str = "application/pdf"):
    return (name, content, mime)


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        database_url=f"sqlite:///{tmp_path / 'db' / 'portal.sqlite'}",
        media_root=tmp_path / "media",
        jwt_secret=TEST_SECRET,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which creates the schema
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin(client):
    """Register and log in an administrator; return the login response body."""
    creds = {"username": "admin", "password": "secret1"}
    r = client.post("/auth/register", json=creds)
    assert r.status_code == 201, r.text
    r = client.post("/auth/login", json=creds)
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def auth_headers(admin):
    return {"Authorization": f"Bearer {admin['token']}"}


@pytest.fixture
def media_root(settings):
    return settings.media_root
