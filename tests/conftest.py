"""
Pytest configuration and fixtures for the generic server tests.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from crud_shared.infrastructure.db import get_session
from generic_server.main import create_app
from generic_server.models import Author, Base, Book
from generic_server.repositories import SQLAlchemyRepository


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    """
    Create a fresh in-memory database for each test.
    StaticPool keeps the single connection (and so the data) alive.
    """
    engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def book_repository(db_session):
    return SQLAlchemyRepository(Book, db_session)


@pytest.fixture
def author_repository(db_session):
    return SQLAlchemyRepository(Author, db_session)


@pytest.fixture
def app(session_factory):
    """
    Create the application with the session dependency bound to the test database.
    Each request gets its own session, as in production.
    """
    app = create_app()

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    """
    Async HTTP client bound to the app.
    Unhandled exceptions come back as 500 responses, as a real server would send.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def controller_for(app):
    """Look up the registered CRUD controller of an entity class."""

    def _lookup(model):
        for controller in app.state.crud_controllers:
            if controller.model is model:
                return controller
        raise LookupError(f"No controller registered for {model.__name__}")

    return _lookup


@pytest_asyncio.fixture
async def seed_author(session_factory):
    """Create a test author."""
    async with session_factory() as session:
        author = Author(name="Frank Herbert", biography="American science fiction author")
        session.add(author)
        await session.commit()
        return author


@pytest_asyncio.fixture
async def seed_book(session_factory, seed_author):
    """Create a test book written by the test author."""
    async with session_factory() as session:
        book = Book(title="Dune", isbn="9780441013593", pages=412, author_id=seed_author.id)
        session.add(book)
        await session.commit()
        return book


async def count_rows(session_factory, model) -> int:
    """Count rows of a model in a fresh session."""
    async with session_factory() as session:
        return len(await SQLAlchemyRepository(model, session).read_all())
