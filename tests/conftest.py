import os

# keep the app's own engine off the on-disk default
os.environ.setdefault("DATABASE_URL", "sqlite://")

import uuid
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from library_api.main import app
from library_api.db.session import get_db
from library_api.models import Base
from library_api.services.author_service import AuthorService
from library_api.services.book_service import BookService

# One in-memory database shared by every connection of the test engine
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture(autouse=True)
def setup_test_database():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def author_service(db_session):
    return AuthorService(db_session)


@pytest.fixture
def book_service(db_session):
    return BookService(db_session)


def _override_get_db():
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def test_client():
    """Create a test client for FastAPI app bound to the test database."""
    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_author(test_client):
    """Create a sample author through the API."""
    author_data = {
        "first_name": "George",
        "last_name": "Orwell",
        "bio": "English novelist and essayist",
        "birth_date": "1903-06-25",
    }

    response = test_client.post("/api/v1/authors", json=author_data)

    assert response.status_code == 201, f"Failed to create sample author: {response.text}"
    return response.json()


@pytest.fixture
def sample_book(test_client, sample_author):
    """Create a sample book owned by sample_author through the API."""
    book_data = {
        "title": "1984",
        "isbn": "978-0-452-28423-4",
        "author_id": sample_author["id"],
        "author_name": "George Orwell",
        "published_date": "1949-06-08",
    }

    response = test_client.post("/api/v1/books", json=book_data)

    assert response.status_code == 201, f"Failed to create sample book: {response.text}"
    return response.json()


@pytest.fixture
def headers_with_correlation():
    """HTTP headers with correlation ID."""
    return {"X-Request-ID": str(uuid.uuid4())}
