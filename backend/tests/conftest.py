"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["EVENT_PUBLISHING_ENABLED"] = "false"
os.environ["BOOTSTRAP_SUPER_ADMIN_EMAIL"] = ""

import itertools
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cafe_api.main import app
from cafe_api.models import Base, Cafe, MenuItem, Table, User
from cafe_api.services.domain import OrderService
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.infrastructure.events import get_event_circuit_breaker, get_event_publisher
from shared.security.auth import sign_access_token
from shared.security.password import hash_password
from shared.security.rate_limit import limiter
from shared.utils.schemas import OrderCreate, OrderLineInput


TEST_PASSWORD = "testpass123"

_email_counter = itertools.count(1)

# SQLite in-memory database for testing
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

limiter.enabled = False


class RecordingPublisher:
    """EventPublisher double that keeps every published event."""

    def __init__(self):
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    async def publish(self, group_key: str, event_name: str, payload: dict[str, Any]) -> None:
        self.events.append((group_key, event_name, payload))

    def groups(self, event_name: str | None = None) -> list[str]:
        return [g for g, name, _ in self.events if event_name is None or name == event_name]


class FailingPublisher:
    """EventPublisher double whose every publish raises."""

    def __init__(self):
        self.attempts = 0

    async def publish(self, group_key: str, event_name: str, payload: dict[str, Any]) -> None:
        self.attempts += 1
        raise ConnectionError("redis down")


@pytest.fixture(scope="session")
def password_hash() -> str:
    """bcrypt is slow on purpose; hash the shared test password once."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture(autouse=True)
def reset_circuit_breaker():
    get_event_circuit_breaker().reset()
    yield
    get_event_circuit_breaker().reset()


@pytest.fixture(scope="function")
def client(db_session, publisher):
    """
    Create a test client with database session and publisher overrides.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_publisher] = lambda: publisher

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Seed fixtures
# =============================================================================


@pytest.fixture
def seed_cafe(db_session) -> Cafe:
    cafe = Cafe(name="Test Cafe", address="12 MG Road")
    db_session.add(cafe)
    db_session.commit()
    db_session.refresh(cafe)
    return cafe


@pytest.fixture
def other_cafe(db_session) -> Cafe:
    cafe = Cafe(name="Other Cafe")
    db_session.add(cafe)
    db_session.commit()
    db_session.refresh(cafe)
    return cafe


@pytest.fixture
def seed_table(db_session, seed_cafe) -> Table:
    table = Table(cafe_id=seed_cafe.id, table_number=1, slug="table-1")
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def seed_menu(db_session, seed_cafe) -> dict[str, MenuItem]:
    """Two orderable items and one sold out."""
    items = {
        "dosa": MenuItem(cafe_id=seed_cafe.id, name="Masala Dosa", price_cents=120_00, category="Mains"),
        "chai": MenuItem(cafe_id=seed_cafe.id, name="Chai", price_cents=30_00, category="Beverages"),
        "thali": MenuItem(
            cafe_id=seed_cafe.id,
            name="Thali",
            price_cents=250_00,
            category="Mains",
            is_available=False,
        ),
    }
    db_session.add_all(items.values())
    db_session.commit()
    for item in items.values():
        db_session.refresh(item)
    return items


@pytest.fixture
def make_user(db_session, password_hash):
    """Factory creating a user with the shared test password."""

    def _make(role: str, cafe_id: int | None = None, email: str | None = None) -> User:
        user = User(
            name=f"{role.title()} User",
            email=email or f"{role.lower()}{next(_email_counter)}@test.com",
            password_hash=password_hash,
            role=role,
            cafe_id=cafe_id,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


def headers_for(user: User) -> dict[str, str]:
    token = sign_access_token(
        user_id=user.id,
        role=user.role,
        cafe_id=user.cafe_id,
        email=user.email,
        name=user.name,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(make_user, seed_cafe):
    """
    Factory returning bearer headers for a fresh user of the given role.
    Staff belong to seed_cafe unless another cafe_id is given.
    """

    def _headers(role: str, cafe_id: int | None = None) -> dict[str, str]:
        if role == Roles.SUPER_ADMIN:
            user = make_user(role)
        else:
            user = make_user(role, cafe_id or seed_cafe.id)
        return headers_for(user)

    return _headers


@pytest.fixture
def ctx_for():
    """Factory for the caller context dict the routers pass to services."""

    def _ctx(role: str, cafe_id: int | None, user_id: int = 1) -> dict[str, Any]:
        return {
            "user_id": user_id,
            "role": role,
            "cafe_id": cafe_id,
            "email": f"{role.lower()}@test.com",
            "name": role.title(),
        }

    return _ctx


@pytest.fixture
def place_order(db_session, seed_table, seed_menu):
    """Factory placing an order through OrderService; defaults to 2 dosa + 1 chai."""

    def _place(items: list[tuple[str, int]] | None = None, slug: str | None = None):
        entries = items or [("dosa", 2), ("chai", 1)]
        data = OrderCreate(
            table_slug=slug or seed_table.slug,
            items=[
                OrderLineInput(menu_item_id=seed_menu[key].id, quantity=qty)
                for key, qty in entries
            ],
        )
        return OrderService(db_session).create_order(data)

    return _place


@pytest.fixture
def token_headers():
    """Bearer headers for an existing user."""
    return headers_for
