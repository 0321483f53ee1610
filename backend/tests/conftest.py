"""Pytest fixtures — file-backed SQLite database, fresh for every test."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from menux.database import Base, get_db
from menux.main import app
from menux.services import access_service
from menux.services.identity_provider import InMemoryIdentityProvider, get_identity_provider

# Import all models so they register with Base.metadata
from menux.models.user import User                  # noqa: F401
from menux.models.admin_request import AdminRequest  # noqa: F401
from menux.models.user_role import UserRole          # noqa: F401
from menux.models.role_mutation import RoleMutation  # noqa: F401
from menux.models.menu_item import MenuItem          # noqa: F401

SQLITE_URL = "sqlite:///./test.db"
UNREACHABLE_URL = "sqlite:////nonexistent-menux-dir/unreachable.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def broken_db():
    """A session whose store cannot be reached — every statement fails."""
    engine = create_engine(UNREACHABLE_URL)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(scope="function")
def identity_provider():
    return InMemoryIdentityProvider(ttl_seconds=3600)


@pytest.fixture(scope="function")
def client(session_factory, identity_provider):
    """FastAPI TestClient with the database and identity provider overridden."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, email: str = "owner@bar.com") -> dict:
    """Helper — POST /api/auth/sign-up and return the created user JSON."""
    resp = client.post("/api/auth/sign-up", json={"email": email})
    assert resp.status_code == 201, resp.text
    return resp.json()["user"]


def auth_headers(client: TestClient, email: str) -> dict:
    """Helper — sign in and return a bearer Authorization header."""
    resp = client.post("/api/auth/sign-in", json={"email": email})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def create_admin(client: TestClient, db, email: str = "admin@bar.com") -> dict:
    """Helper — register an identity, grant it admin directly, return headers."""
    user = create_test_user(client, email=email)
    access_service.set_role(db, user["user_id"], "admin")
    return auth_headers(client, email)
