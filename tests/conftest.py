# tests/conftest.py

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_USERNAME"] = "admin"

from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from volunteer_hub.main import app
from volunteer_hub.database import Base, get_db
from volunteer_hub.models import User, UserRole, UserStatus
from volunteer_hub.scheduling.algorithms.partition import partition_tokens
from volunteer_hub.scheduling.core.time_arithmetic import parse_clock
from volunteer_hub.scheduling.core.time_window import EventWindow

EVENT_DATE = date(2024, 1, 5)
SEED = "5f0c0ffee0ddba11fee1dead"

# --- Test Database Setup ---
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_test_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    yield session
    session.close()


def override_get_db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# --- API helpers ---
def register_and_login(client, username, password="secret-pass"):
    response = client.post("/users/register", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    response = client.post("/users/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return register_and_login(client, "admin")


@pytest.fixture
def user_headers(client):
    return register_and_login(client, "volunteer")


# --- Ledger fixtures (plain objects, no database) ---
def make_event(event_id="65a1b2c3d4e5f60718293a4b", start="9:00", end="12:00",
               volunteer_count=3, event_date=EVENT_DATE, donations_needed=100):
    window = EventWindow(parse_clock(start), parse_clock(end), event_date)
    return SimpleNamespace(
        id=event_id,
        date=event_date,
        active=True,
        slots=partition_tokens(event_id, window, volunteer_count),
        volunteers_needed=volunteer_count,
        volunteers_attending=0,
        donations_needed=donations_needed,
        donations_received=0,
    )


def make_user(user_id=1, status=UserStatus.VOLUNTEER):
    return SimpleNamespace(
        id=user_id,
        status=status,
        given_donations=0,
        volunteered_time="0:00",
        reserved_slots=[SEED],
        reserved_events=[],
    )


# --- Service fixtures ---
@pytest.fixture
def volunteer(db):
    user = User(
        username="volunteer",
        hashed_password="not-a-real-hash",
        role=UserRole.USER,
        status=UserStatus.VOLUNTEER,
        reserved_slots=[SEED],
        reserved_events=[],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def new_event():
    return make_event


@pytest.fixture
def new_user():
    return make_user


@pytest.fixture
def login(client):
    return lambda username, password="secret-pass": register_and_login(client, username, password)
