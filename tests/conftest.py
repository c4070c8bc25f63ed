"""
pytest Fixtures for Bookshelf API Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions, the cache and the client (isolation
  between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_BACKEND"] = "memory"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookshelf.database import Base, get_db
from bookshelf.main import app
from bookshelf.models import Author, Book, User
from bookshelf.services.cache import InMemoryBackend, TagAwareCache, get_cache
from bookshelf.services.security import create_access_token, hash_password


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.
# Foreign keys are switched on by the connect listener in bookshelf.database.

@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the connection alive for the entire session.
    Without it, SQLite in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def cache() -> TagAwareCache:
    """A fresh in-memory cache per test, shared with the client."""
    return TagAwareCache(InMemoryBackend())


@pytest.fixture(scope="function")
def client(db_session: Session, cache: TagAwareCache) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database and cache.

    get_db and get_cache are overridden so the app and the test share
    the same session and the same cache instance.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(first_name="Ursula", last_name="Le Guin")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def second_author(db_session: Session) -> Author:
    author = Author(first_name="Frank", last_name="Herbert")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book written by sample_author."""
    book = Book(
        title="The Dispossessed",
        cover_text="An ambiguous utopia.",
        comment="Hugo and Nebula winner",
        author=sample_author,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session, sample_author: Author) -> list[Book]:
    """Create more books than fit on one default page (limit 3)."""
    books = [
        Book(
            title=f"Test Book {i + 1}",
            cover_text=f"Cover text {i + 1}",
            author=sample_author if i % 2 == 0 else None,
        )
        for i in range(7)
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


# =============================================================================
# USER / AUTH FIXTURES
# =============================================================================

@pytest.fixture
def sample_user(db_session: Session) -> User:
    """A regular, active user without write rights."""
    user = User(
        email="reader@example.com",
        hashed_password=hash_password("ReaderPass123"),
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def superuser(db_session: Session) -> User:
    """An administrator, allowed to write."""
    user = User(
        email="admin@example.com",
        hashed_password=hash_password("AdminPass123"),
        is_active=True,
        is_superuser=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def inactive_admin(db_session: Session) -> User:
    user = User(
        email="retired@example.com",
        hashed_password=hash_password("RetiredPass123"),
        is_active=False,
        is_superuser=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def get_auth_headers(user: User) -> dict[str, str]:
    """Bearer header for a user, without going through /auth/login."""
    token = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(superuser: User) -> dict[str, str]:
    return get_auth_headers(superuser)


@pytest.fixture
def user_headers(sample_user: User) -> dict[str, str]:
    return get_auth_headers(sample_user)
