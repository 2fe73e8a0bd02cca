"""Pytest configuration and fixtures."""

import os

# Cheap hashes for tests; must be set before the app reads its settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from refund_api.api.dependencies import get_upload_storage  # noqa: E402
from refund_api.database import Base, get_db  # noqa: E402
from refund_api.main import app  # noqa: E402
from refund_api.services.uploads import UploadStorage  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/refunds", "/refunds_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from refund_api import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
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
def upload_storage(tmp_path):
    """Receipt storage rooted in a per-test temporary directory."""
    return UploadStorage(tmp_path / "uploads", max_size_bytes=1024 * 1024)


@pytest.fixture(scope="function")
def client(db, upload_storage):
    """Create a test client with database and storage overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_upload_storage] = lambda: upload_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Factory that registers a user, logs in, and returns auth headers."""

    def _register(
        name: str, email: str, role: str = "employee", password: str = "secret123"
    ) -> AuthHeaders:
        response = client.post(
            "/users",
            json={"name": name, "email": email, "password": password, "role": role},
        )
        assert response.status_code == 201
        user_id = response.json()["id"]

        response = client.post("/sessions", json={"email": email, "password": password})
        assert response.status_code == 200
        token = response.json()["access_token"]

        return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)

    return _register


@pytest.fixture
def employee_headers(register_user):
    return register_user("Alice Employee", "alice@example.com")


@pytest.fixture
def other_employee_headers(register_user):
    return register_user("Bob Employee", "bob@example.com")


@pytest.fixture
def manager_headers(register_user):
    return register_user("Carol Manager", "carol@example.com", role="manager")


@pytest.fixture
def create_refund(client):
    """Factory that files a refund as the given employee."""

    def _create(headers: AuthHeaders, **overrides) -> dict:
        payload = {"name": "Taxi", "amount": 50, "category": "food", "filename": "f.png"}
        payload.update(overrides)
        response = client.post("/refunds", headers=headers, json=payload)
        assert response.status_code == 201
        return response.json()

    return _create
