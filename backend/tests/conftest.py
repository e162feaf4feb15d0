from __future__ import annotations

import os
import tempfile

# Set test environment BEFORE importing search_fallback modules.
# search_fallback.db creates the engine at module level using
# get_settings().db_url, so we must override the env vars first.
_test_tmp = tempfile.mkdtemp(prefix="search-fallback-test-")
os.environ.setdefault("DATA_DIR", os.path.join(_test_tmp, "data"))
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")
os.environ.setdefault("INTEREST_EXPIRY_SWEEP_MINUTES", "0")
os.environ["SMTP_HOST"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from search_fallback.config import Settings, get_settings
from search_fallback.db import get_session
from search_fallback.dependencies import get_interest_matcher
from search_fallback.errors import DispatchError
from search_fallback.main import app as fastapi_app
from search_fallback.services.catalog import CatalogService
from search_fallback.services.interest_matcher import InterestMatcher
from search_fallback.services.notifications import NotificationDispatcher, NotificationMessage

ADMIN_KEY = os.environ["ADMIN_API_KEY"]

SAMPLE_TERMS = [
    {"term": "iPhone 15 Pro", "type": "product", "metadata": {"brand": "Apple", "category": "Smartphones"}},
    {"term": "Samsung Galaxy S24", "type": "product", "metadata": {"brand": "Samsung", "category": "Smartphones"}},
    {"term": "MacBook Pro", "type": "product", "metadata": {"brand": "Apple", "category": "Laptops"}},
    {
        "term": "PlayStation 5",
        "type": "product",
        "metadata": {"brand": "Sony", "category": "Gaming Consoles", "aliases": ["PS5", "PlayStation V"]},
    },
    {"term": "Smartphones", "type": "category", "metadata": {"category": "Electronics"}},
    {"term": "Plumbing", "type": "service", "metadata": {"category": "Services"}},
]


class RecordingDispatcher(NotificationDispatcher):
    """Collects messages instead of delivering them."""

    kind = "recording"

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.sent: list[NotificationMessage] = []
        self.fail_for = fail_for or set()

    def send(self, message: NotificationMessage) -> None:
        if message.to_address in self.fail_for:
            raise DispatchError(f"refused {message.to_address}")
        self.sent.append(message)


# ── Database fixtures ─────────────────────────────────────────────────


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite engine for testing.

    Uses StaticPool so every connection shares the same in-memory database.
    Recreates tables per test for full isolation.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    """Provide a fresh session per test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    return get_settings()


@pytest.fixture(name="catalog")
def catalog_fixture(session):
    """Seed a handful of terms; returns {term text: SearchTerm}."""
    CatalogService().seed(session, SAMPLE_TERMS)
    return {t.term: t for t in CatalogService().list_terms(session, limit=100)}


# ── Interest matcher fixtures ─────────────────────────────────────────


@pytest.fixture(name="dispatcher")
def dispatcher_fixture() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture(name="interest_matcher")
def interest_matcher_fixture(engine, dispatcher) -> InterestMatcher:
    # One worker: the in-memory database is a single shared connection
    return InterestMatcher(engine, dispatcher, concurrency=1, base_url="https://market.test")


# ── HTTP client fixtures ──────────────────────────────────────────────


@pytest.fixture(name="client")
def client_fixture(session, interest_matcher):
    """FastAPI TestClient with overridden DB session and the admin key set."""

    def _get_session_override():
        yield session

    fastapi_app.dependency_overrides[get_session] = _get_session_override
    fastapi_app.dependency_overrides[get_interest_matcher] = lambda: interest_matcher
    with TestClient(fastapi_app, headers={"X-Admin-Key": ADMIN_KEY}) as client:
        yield client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture(name="client_no_auth")
def client_no_auth_fixture(session, interest_matcher):
    """TestClient with DB override but NO admin key — for testing 401s."""

    def _get_session_override():
        yield session

    fastapi_app.dependency_overrides[get_session] = _get_session_override
    fastapi_app.dependency_overrides[get_interest_matcher] = lambda: interest_matcher
    with TestClient(fastapi_app) as tc:
        yield tc
    fastapi_app.dependency_overrides.clear()
