"""Pytest configuration: in-memory database, API client and user fixtures."""

import os

# Set test configuration BEFORE any imports from homeledger
# This ensures the engine and SessionLocal use an in-memory database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["REGISTRATION_ENABLED"] = "false"
# Throttling is switched on only by the tests that exercise it
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOGIN_RATE_LIMIT"] = "3/minute"
os.environ["API_RATE_LIMIT"] = "10/minute"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from homeledger.main import app  # noqa: E402
from homeledger.models import Base, User  # noqa: E402
from homeledger.services import SessionLocal, engine, get_db  # noqa: E402
from homeledger.services.auth_service import hash_password, issue_token  # noqa: E402

TEST_PASSWORD = "Secret123!"


@pytest.fixture
def db_session():
    """Fresh schema and session per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """API client whose requests share the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory creating users directly in the database."""

    def _make_user(username: str = "alice", email: str | None = None) -> User:
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            password_hash=hash_password(TEST_PASSWORD),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user("alice")


@pytest.fixture
def other_user(make_user):
    return make_user("mallory")


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {issue_token(user.id)}"}


@pytest.fixture
def other_auth_headers(other_user):
    return {"Authorization": f"Bearer {issue_token(other_user.id)}"}


@pytest.fixture
def property_id(client, auth_headers):
    """A property owned by ``user``, created through the API."""
    response = client.post(
        "/api/properties", json={"name": "Beach House"}, headers=auth_headers
    )
    assert response.status_code == 201
    return response.json()["id"]
