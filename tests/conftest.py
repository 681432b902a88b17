"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

import matchmaker.models  # noqa: F401
from matchmaker.database import Base, create_db_engine, create_session_factory, get_db
from matchmaker.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and the refresh token."""

    def __init__(
        self, *args, user_id: int | None = None, refresh_token: str | None = None, **kwargs
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.refresh_token = refresh_token


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").rsplit("/", 1)[0] + "/matchmaker_test"
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

IS_POSTGRES = "postgresql" in SQLALCHEMY_DATABASE_URL

engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = create_session_factory(engine)


def future_date(days: int = 3) -> datetime:
    return datetime.now(UTC) + timedelta(days=days)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if IS_POSTGRES:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register users through the API and return their auth headers."""

    def _make_user(username: str, password: str = "secret1", **extra) -> AuthHeaders:
        response = client.post(
            "/auth/register", json={"username": username, "password": password, **extra}
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return AuthHeaders(
            {"Authorization": f"Bearer {data['access_token']}"},
            user_id=data["user"]["id"],
            refresh_token=data["refresh_token"],
        )

    return _make_user


@pytest.fixture
def auth_headers(make_user):
    """Create a user and return auth headers with user info."""
    return make_user("testuser", "testpass123")


@pytest.fixture
def make_game(client, auth_headers):
    """Create catalog games through the API and return their ids."""

    def _make_game(name: str = "Catan", **overrides) -> int:
        payload = {
            "name": name,
            "description": f"{name} description",
            "min_players": 2,
            "max_players": 4,
            "playing_time_min": 60,
            "playing_time_max": 120,
            "age_min": 10,
            "categories": ["strategy"],
            "mechanics": ["trading"],
            "complexity": 2.5,
            "publisher": "Kosmos",
            "year_published": 1995,
            **overrides,
        }
        response = client.post("/games", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]["id"]

    return _make_game


@pytest.fixture
def match_payload(make_game):
    """Build match creation payloads for a freshly created game."""
    game_id = make_game()

    def _payload(**overrides) -> dict:
        payload = {
            "game_id": game_id,
            "title": "Friday Catan",
            "description": "Casual evening game",
            "location": {
                "latitude": 52.52,
                "longitude": 13.405,
                "address": "Alexanderplatz 1",
                "venue": "Cafe Meeple",
                "city": "Berlin",
            },
            "scheduled_date": future_date().isoformat(),
            "duration": 120,
            "max_players": 4,
            "tags": ["casual"],
            **overrides,
        }
        return payload

    return _payload
