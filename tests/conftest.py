"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src import models  # noqa: E402, F401
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "testpass123"


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's email and token."""

    def __init__(self, *args, email: str | None = None, token: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.email = email
        self.token = token


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/posts", "/posts_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

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
def auth_headers(client):
    """Register a user and return bearer auth headers for them."""
    response = client.post(
        "/register",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD},
    )
    assert response.status_code == 201
    token = response.json()["token"]

    return AuthHeaders({"Authorization": f"Bearer {token}"}, email=TEST_EMAIL, token=token)


@pytest.fixture
def post(client):
    """Create a post and return its JSON representation."""
    response = client.post("/posts", json={"title": "First post", "body": "Hello there"})
    assert response.status_code == 201
    return response.json()
