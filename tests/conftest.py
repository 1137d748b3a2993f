"""Shared fixtures: a per-test application backed by a throwaway SQLite database."""
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from api.main import create_app
from core.config import Settings
from models import Base, Bookmark


def make_bookmarks_array() -> list[dict]:
    """Bookmarks used to seed the database, in the shape the API returns them."""
    return [
        {
            "id": 1,
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        },
        {
            "id": 2,
            "title": "Google",
            "url": "https://www.google.com",
            "description": "Where we find everything else",
            "rating": 4,
        },
        {
            "id": 3,
            "title": "MDN",
            "url": "https://developer.mozilla.org",
            "description": "The only place to find web documentation",
            "rating": 5,
        },
    ]


async def _build_app(tmp_path: Path, environment: str) -> FastAPI:
    settings = Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        environment=environment,
    )
    app = create_app(settings)
    async with app.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return app


@pytest.fixture
async def app(tmp_path: Path) -> AsyncGenerator[FastAPI]:
    """Application in development mode (verbose errors)."""
    app = await _build_app(tmp_path, "development")
    yield app
    await app.state.engine.dispose()


@pytest.fixture
async def production_app(tmp_path: Path) -> AsyncGenerator[FastAPI]:
    """Application in production mode (terse errors)."""
    app = await _build_app(tmp_path, "production")
    yield app
    await app.state.engine.dispose()


def _client_for(app: FastAPI) -> AsyncClient:
    # Unhandled errors come back as 500 responses instead of being re-raised
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the development app."""
    async with _client_for(app) as client:
        yield client


@pytest.fixture
async def production_client(production_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the production app."""
    async with _client_for(production_app) as client:
        yield client


@pytest.fixture
async def db_session(app: FastAPI) -> AsyncGenerator[AsyncSession]:
    """Session on the development app's database, for seeding and inspection."""
    async with app.state.session_factory() as session:
        yield session


@pytest.fixture
async def seeded_bookmarks(db_session: AsyncSession) -> list[dict]:
    """Insert make_bookmarks_array() and return it."""
    bookmarks = make_bookmarks_array()
    db_session.add_all([Bookmark(**b) for b in bookmarks])
    await db_session.commit()
    return bookmarks
