"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Cheap hashing and no startup DDL against the configured database
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from starter_api.main import app
from starter_api.models import Base, User
from starter_api.services.domain import UserService
from starter_shared.infrastructure.db import get_db
from starter_shared.security.password import hash_password


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    # Create all tables
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def user_service(db_session):
    """UserService bound to the test session."""
    return UserService(db_session)


@pytest.fixture
def make_user(db_session):
    """Factory persisting a user; keyword arguments override the defaults."""

    def _make_user(username: str, **fields) -> User:
        fields.setdefault("email", f"{username}@test.com")
        fields.setdefault("password", hash_password("testpass123"))
        user = User(username=username, **fields)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def seed_admin_user(make_user):
    """Create an admin-like account that owns other users."""
    return make_user("admin", firstname="Test", lastname="Admin", verified=True)


@pytest.fixture
def seed_owned_user(make_user, seed_admin_user):
    """Create a user owned and created by the admin account."""
    return make_user(
        "alice",
        email="alice@example.com",
        owner_id=seed_admin_user.id,
        created_by_id=seed_admin_user.id,
        verified=True,
    )
