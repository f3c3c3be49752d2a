"""Shared fixtures: an in-memory row store, a fixed clock and an API client."""
from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from funeral_desk.core.security import AuthenticatedUser, get_security_provider
from funeral_desk.store import SqlTabularStore

FIXED_NOW = datetime(2025, 3, 15, 10, 30, tzinfo=ZoneInfo("Asia/Taipei"))

STAFF_ROWS = [
    ["S001", "Admin", "admin@example.com", "secret", "Administrator", "Active"],
    ["S002", "Lin Mei", "Mei@Example.com", "pass123", "Funeral director", "Active"],
    ["S003", "Chen Wei", "wei@example.com", "pass123", "Funeral director", "Inactive"],
]
MATERIAL_ROWS = [
    ["M01", "Incense", "box", "100", "50"],
    ["M02", "Candles", "pair", "80", "10"],
]
VENDOR_ROWS = [["V25-001", "Evergreen Florist", "Mr. Wang", "02-2345-6789", "Flowers"]]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    engine.dispose()


@pytest.fixture()
def store(engine) -> SqlTabularStore:
    """Provide an empty in-memory row store for each test."""

    store = SqlTabularStore(engine)
    store.create_tables()
    return store


@pytest.fixture()
def seeded_store(store: SqlTabularStore) -> SqlTabularStore:
    for row in STAFF_ROWS:
        store.append_row("staff", row)
    for row in MATERIAL_ROWS:
        store.append_row("materials", row)
    for row in VENDOR_ROWS:
        store.append_row("vendors", row)
    return store


@pytest.fixture()
def clock():
    return lambda: FIXED_NOW


@pytest.fixture()
def staff_user() -> AuthenticatedUser:
    return AuthenticatedUser(staff_id="S002", name="Lin Mei", role="Funeral director")


@pytest.fixture()
def admin_user() -> AuthenticatedUser:
    return AuthenticatedUser(staff_id="S001", name="Admin", role="Administrator")


@pytest.fixture()
def client(seeded_store, clock):
    from funeral_desk.main import create_app
    from funeral_desk.routers.dependencies import get_clock, get_store

    app = create_app()
    app.dependency_overrides[get_store] = lambda: seeded_store
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    """Return a helper building an ``Authorization`` header for a user."""

    def _headers(user: AuthenticatedUser) -> dict[str, str]:
        token = get_security_provider().create_access_token(user)
        return {"Authorization": f"Bearer {token}"}

    return _headers
