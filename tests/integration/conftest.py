"""Integration test fixtures for the store and HTTP client.

Each test gets its own SQLite file, so no external database is needed.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from src.research_notes.core.health import reset_health_cache
from src.research_notes.main import create_app
from src.research_notes.models import Note, Project
from src.research_notes.store import NotesStore
from tests.factories import NoteFactory, ProjectFactory


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create a test engine on a fresh SQLite file."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def store(engine: AsyncEngine) -> NotesStore:
    """Store with the schema created."""
    notes_store = NotesStore(engine)
    await notes_store.create_schema()
    return notes_store


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide a session for seeding rows directly.

    Tests must call `await session.commit()` to persist changes.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def app(store: NotesStore) -> FastAPI:
    reset_health_cache()
    return create_app(store=store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def project(db_session: AsyncSession) -> Project:
    """A persisted project with no notes."""
    project = ProjectFactory.build(name="Field study")
    db_session.add(project)
    await db_session.commit()
    return project


@pytest.fixture
async def seed_notes(db_session: AsyncSession, project: Project):
    """Return a coroutine that inserts `count` notes with display_order 0..count-1."""

    async def _seed(count: int) -> list[Note]:
        notes = [
            NoteFactory.build(project_id=project.id, title=f"Note {i}", display_order=i)
            for i in range(count)
        ]
        db_session.add_all(notes)
        await db_session.commit()
        return notes

    return _seed
