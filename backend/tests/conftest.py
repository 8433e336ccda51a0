"""
Hub Foundation — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (in-memory DB, seeded records,
       request contexts, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── db_engine: In-memory SQLite engine with every table created
    ├── db_session: Session on an engine seeded with artists and artworks
    ├── make_context: Factory for hand-built RequestContext values
    └── test_client: HTTPX AsyncClient against the app, wired to db_engine

Seed data (see seed_records):
    Artists 1-3 (3 is a dealer, not an artist)
    Artworks 1-15
        artist 1 → artworks 1-5, artist 2 → artworks 6-8, others uncredited
        on view       → even ids (7 artworks)
        public domain → ids 1-3
"""

import os

# Override settings for testing BEFORE any hub_foundation imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from typing import Any, AsyncGenerator, Dict, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hub_foundation.database import Base, get_db_session
from hub_foundation.models import Artist, Artwork
from hub_foundation.request_context import RequestContext

async def seed_records(session: AsyncSession) -> None:
    session.add_all([
        Artist(id=1, title="Claude Monet", birth_date=1840, death_date=1926, is_artist=True),
        Artist(id=2, title="Georges Seurat", birth_date=1859, death_date=1891, is_artist=True),
        Artist(id=3, title="Paul Durand-Ruel", birth_date=1831, death_date=1922, is_artist=False),
    ])
    await session.flush()

    for i in range(1, 16):
        if i <= 5:
            artist_id = 1
        elif i <= 8:
            artist_id = 2
        else:
            artist_id = None
        session.add(Artwork(
            id=i,
            title=f"Artwork {i}",
            date_display=str(1880 + i),
            medium_display="Oil on canvas",
            is_on_view=(i % 2 == 0),
            is_public_domain=(i <= 3),
            artist_id=artist_id,
        ))
    await session.commit()


@pytest_asyncio.fixture
async def db_engine():
    """
    Provides an in-memory SQLite engine with all tables created and seeded.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        await seed_records(session)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides a fresh session on the seeded engine.

    Separate from the seeding session, so nothing is already in the
    identity map and relationships load the way they do in production.
    """
    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def make_context():
    """
    Provides a factory for RequestContext values.

    Usage:
        ctx = make_context("/api/v1/artworks/on-view", query={"limit": "5"})
    """
    def _make(
        path: str = "/api/v1/things",
        query: Optional[Dict[str, str]] = None,
        route: Optional[Dict[str, Any]] = None,
        method: str = "GET",
        db: Any = None,
    ) -> RequestContext:
        return RequestContext(
            method=method,
            path=path,
            route_params=route or {},
            query=query or {},
            db=db,
            base_url="http://test",
        )

    return _make


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient configured to talk to our FastAPI app.
    How:     Uses ASGITransport to route requests directly to the app, with
             get_db_session overridden to hand out sessions on db_engine.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from hub_foundation.main import app

    factory = async_sessionmaker(db_engine, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
