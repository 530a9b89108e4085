import os

# Test configuration must be in place before the app modules read it
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["MASTER_PASSCODE"] = "91111"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["BOOTHS_ENFORCE_SCOPE"] = "true"

import pytest
from types import SimpleNamespace
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import Base, get_db
from app.db.store import BOOTHS, EntityStore
from app.db.seed import ensure_root_account
from app.core.roles import Role
from app.services.mutations import MutationEngine
from app.models import account, booth  # noqa: F401

# Test database - in-memory SQLite
TEST_DB_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a test database session for direct database tests"""
    # StaticPool keeps one connection so every thread sees the same database
    test_engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = testing_session_local()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def store(db_session):
    return EntityStore(db_session)


@pytest.fixture
def engine(store):
    return MutationEngine(store, enforce_scope=True)


@pytest.fixture
def root(store):
    return ensure_root_account(store)


@pytest.fixture
def hierarchy(store, engine, root):
    """
    A small tree:

        root
        └── alice (admin)
            ├── bob (sub admin) ── charlie, diana (users)
            └── eve (sub admin) ── frank (user)

    Booths: hall-a (bob, charlie), hall-b (bob, diana),
    west (eve, frank), east (eve, unassigned)
    """
    alice = engine.create_account(root, "alice", "11111", Role.ADMIN)
    bob = engine.create_account(alice, "bob", "55555", Role.SUB_ADMIN)
    eve = engine.create_account(alice, "eve", "66666", Role.SUB_ADMIN)
    charlie = engine.create_account(bob, "charlie", "12345", Role.LEAF)
    diana = engine.create_account(bob, "diana", "54321", Role.LEAF)
    frank = engine.create_account(eve, "frank", "67890", Role.LEAF)

    hall_a = engine.create_booth(bob, "Main Hall - Section A", 100, charlie.id)
    store.update(BOOTHS, hall_a.id, {"selected_votes": [5, 12, 25]})
    hall_b = engine.create_booth(bob, "Main Hall - Section B", 150, diana.id)
    west = engine.create_booth(eve, "West Wing", 200, frank.id)
    east = engine.create_booth(eve, "East Wing", 1500)

    return SimpleNamespace(
        root=root, alice=alice, bob=bob, eve=eve,
        charlie=charlie, diana=diana, frank=frank,
        hall_a=hall_a, hall_b=hall_b, west=west, east=east
    )


@pytest.fixture
def client(db_session):
    """Test client for the real app with its database swapped for the test session"""
    from main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log in through the API and return the authorization headers"""
    def _login(display_name: str, passcode: str) -> dict:
        response = client.post(
            "/api/v1/auth/login",
            json={"display_name": display_name, "passcode": passcode}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _login
