"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from user_directory import models  # noqa: F401
from user_directory.config import Settings
from user_directory.database import Base, get_db
from user_directory.main import create_app
from user_directory.models.api_client import ApiClient
from user_directory.services.passwords import pwd_context

TEST_API_KEY = "test-api-key-123"
TEST_CLIENT_NAME = "Test Client"

# PostgreSQL when TEST_DATABASE_URL is set, SQLite locally
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="session", autouse=True)
def fast_password_hashing():
    """Use the minimum bcrypt cost so hashing doesn't dominate test time."""
    pwd_context.update(bcrypt__rounds=4)
    yield


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


@pytest.fixture
def settings():
    """Development settings with the explorer bypass switched on."""
    return Settings(
        _env_file=None,
        environment="development",
        docs_bypass_enabled=True,
        database_url=SQLALCHEMY_DATABASE_URL,
    )


@pytest.fixture
def make_app(db, settings):
    """Factory for apps wired to the test database."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    def _make(app_settings=None, session_factory=TestingSessionLocal):
        app = create_app(settings=app_settings or settings, session_factory=session_factory)
        app.dependency_overrides[get_db] = override_get_db
        return app

    return _make


@pytest.fixture(scope="function")
def app(make_app):
    return make_app()


@pytest.fixture(scope="function")
def client(app):
    """Create a test client with database override."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_key_headers(db):
    """Register the test API client and return headers carrying its key."""
    db.add(ApiClient(name=TEST_CLIENT_NAME, api_key=TEST_API_KEY))
    db.commit()
    return {"X-Api-Key": TEST_API_KEY}


@pytest.fixture
def create_user(client, api_key_headers):
    """Factory creating users through the API."""

    def _create(**overrides):
        payload = {
            "username": "testuser",
            "fullName": "Test User",
            "email": "test@example.com",
            "password": "testpass123",
        }
        payload.update(overrides)
        response = client.post("/Users", headers=api_key_headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
