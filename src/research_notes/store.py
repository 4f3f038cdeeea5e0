"""Persistence client for the projects and notes tables.

A single NotesStore is built at process start and handed to the route
handlers through a FastAPI dependency. Every storage failure surfaces as
StoreError, a missing row as NotFoundError.
"""

import asyncio
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from src.research_notes.core.config import Settings
from src.research_notes.core.db import create_engine_from_settings
from src.research_notes.core.exceptions import (
    NotFoundError,
    PartialBatchError,
    StoreError,
    ValidationError,
)
from src.research_notes.core.logging import get_logger
from src.research_notes.models import Note, Project
from src.research_notes.models.base import utc_now
from src.research_notes.repositories import NoteRepository, ProjectRepository
from src.research_notes.schemas import (
    NoteCreate,
    NoteOrder,
    NoteUpdate,
    ProjectCreate,
    ProjectUpdate,
)

logger = get_logger(__name__)

# Built-in sections every new tabbed note starts with, in display order.
DEFAULT_TAB_NAMES: tuple[str, ...] = ("finding", "evidence", "details")


def build_default_tabs() -> dict[str, dict[str, Any]]:
    """Empty built-in tabs, timestamped like a browser's toISOString()."""
    created_at = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {
        name: {"content": "", "order": position, "created_at": created_at}
        for position, name in enumerate(DEFAULT_TAB_NAMES, start=1)
    }


def _check_active_tab(active_tab: str | None, tabs: dict[str, Any] | None) -> None:
    if active_tab is None:
        return
    if not tabs or active_tab not in tabs:
        raise ValidationError(
            "active_tab", f"Active tab '{active_tab}' is not one of the note's tabs"
        )


def _first_tab(tabs: dict[str, Any]) -> str | None:
    """Name of the lowest-order tab, or None when there are no tabs."""
    if not tabs:
        return None
    return min(tabs, key=lambda name: tabs[name]["order"])


class NotesStore:
    """Table-store operations for projects and notes."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "NotesStore":
        return cls(create_engine_from_settings(settings))

    @asynccontextmanager
    async def _session(self, failure: str) -> AsyncGenerator[AsyncSession]:
        """Open a session; storage exceptions become StoreError(failure).

        Uncommitted work is rolled back when the session closes.
        """
        try:
            async with self._session_factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(failure) from e

    # --- Lifecycle ---

    async def create_schema(self) -> None:
        """Create missing tables (local runs and tests; production uses Alembic)."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError("Failed to create schema") from e

    async def ping(self) -> None:
        """Run a trivial query to check the store is reachable."""
        async with self._session("Store unreachable") as session:
            await session.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Dispose the engine. Call during shutdown."""
        await self.engine.dispose()

    # --- Projects ---

    async def list_projects(self) -> list[Project]:
        async with self._session("Failed to fetch projects") as session:
            return await ProjectRepository(session).list_all()

    async def create_project(self, data: ProjectCreate) -> Project:
        async with self._session("Failed to create project") as session:
            project = Project(name=data.name, description=data.description)
            ProjectRepository(session).add(project)
            await session.commit()
            await session.refresh(project)
        logger.info("Project created", project_id=str(project.id))
        return project

    async def get_project(self, project_id: UUID) -> Project:
        async with self._session("Failed to fetch project") as session:
            project = await ProjectRepository(session).get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def update_project(self, project_id: UUID, data: ProjectUpdate) -> Project:
        """Apply the fields present in `data`; updated_at is always refreshed."""
        async with self._session("Failed to update project") as session:
            project = await ProjectRepository(session).get_by_id(project_id)
            if project is None:
                raise NotFoundError("Project not found")

            for field, value in data.model_dump(exclude_unset=True).items():
                setattr(project, field, value)
            project.updated_at = utc_now()

            await session.commit()
            await session.refresh(project)
        logger.info("Project updated", project_id=str(project_id))
        return project

    async def delete_project(self, project_id: UUID) -> bool:
        """Delete a project together with its notes.

        Returns False when no project had this id.
        """
        async with self._session("Failed to delete project") as session:
            notes_removed = await NoteRepository(session).delete_by_project(project_id)
            deleted = await ProjectRepository(session).delete_by_id(project_id)
            await session.commit()
        if deleted:
            logger.info("Project deleted", project_id=str(project_id), notes_removed=notes_removed)
        else:
            logger.info("Delete requested for non-existent project", project_id=str(project_id))
        return deleted

    # --- Notes ---

    async def list_notes(self, project_id: UUID) -> list[Note]:
        async with self._session("Failed to fetch notes") as session:
            return await NoteRepository(session).list_by_project(project_id)

    async def create_note(self, project_id: UUID, data: NoteCreate) -> Note:
        """Insert a note at the end of its project's display order.

        A note sent with neither content nor tabs starts with the built-in tabs.
        """
        row = data.to_row()
        if row.get("content") is None and row.get("tabs") is None:
            row["tabs"] = build_default_tabs()
            row["default_tabs"] = row.get("default_tabs") or list(DEFAULT_TAB_NAMES)
            if row.get("active_tab") is None:
                row["active_tab"] = DEFAULT_TAB_NAMES[0]
        _check_active_tab(row.get("active_tab"), row.get("tabs"))

        async with self._session("Failed to create note") as session:
            if await ProjectRepository(session).get_by_id(project_id) is None:
                raise NotFoundError("Project not found")

            notes = NoteRepository(session)
            note = Note(
                project_id=project_id,
                display_order=await notes.next_display_order(project_id),
                **row,
            )
            notes.add(note)
            await session.commit()
            await session.refresh(note)
        logger.info(
            "Note created",
            note_id=str(note.id),
            project_id=str(project_id),
            display_order=note.display_order,
        )
        return note

    async def get_note(self, note_id: UUID) -> Note:
        async with self._session("Failed to fetch note") as session:
            note = await NoteRepository(session).get_by_id(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    async def update_note(self, note_id: UUID, data: NoteUpdate) -> Note:
        """Apply the fields present in `data`; updated_at is always refreshed."""
        row = data.to_row()
        async with self._session("Failed to update note") as session:
            note = await NoteRepository(session).get_by_id(note_id)
            if note is None:
                raise NotFoundError("Note not found")

            if row.get("active_tab") is not None:
                _check_active_tab(row["active_tab"], row["tabs"] if "tabs" in row else note.tabs)
            elif "tabs" in row and "active_tab" not in row:
                tabs = row["tabs"] or {}
                if note.active_tab is not None and note.active_tab not in tabs:
                    row["active_tab"] = _first_tab(tabs)

            for field, value in row.items():
                setattr(note, field, value)
            note.updated_at = utc_now()

            await session.commit()
            await session.refresh(note)
        logger.info("Note updated", note_id=str(note_id), fields=sorted(row))
        return note

    async def delete_note(self, note_id: UUID) -> bool:
        """Delete one note. Returns False when no note had this id."""
        async with self._session("Failed to delete note") as session:
            deleted = await NoteRepository(session).delete_by_id(note_id)
            await session.commit()
        if deleted:
            logger.info("Note deleted", note_id=str(note_id))
        else:
            logger.info("Delete requested for non-existent note", note_id=str(note_id))
        return deleted

    # --- Reorder ---

    async def _apply_order(self, note_id: UUID, order: int) -> bool:
        async with self._session("Failed to update note order") as session:
            found = await NoteRepository(session).set_display_order(note_id, order)
            await session.commit()
        return found

    async def reorder_notes(self, items: Sequence[NoteOrder]) -> int:
        """Write each (id, order) pair concurrently, one row per update.

        Best effort: pairs that succeed stay applied when others fail.
        Returns the number of notes updated.

        Raises:
            PartialBatchError: some pairs failed (unknown id or store error).
            StoreError: every pair failed with a store error.
        """
        results = await asyncio.gather(
            *(self._apply_order(item.id, item.order) for item in items),
            return_exceptions=True,
        )

        failed_ids: list[UUID] = []
        store_failures = 0
        for item, result in zip(items, results, strict=True):
            if isinstance(result, StoreError):
                store_failures += 1
                failed_ids.append(item.id)
                logger.warning(
                    "Failed to update note order",
                    note_id=str(item.id),
                    error=repr(result.__cause__),
                )
            elif isinstance(result, BaseException):
                raise result
            elif not result:
                failed_ids.append(item.id)
                logger.warning("Reorder requested for non-existent note", note_id=str(item.id))

        if store_failures == len(items):
            raise StoreError("Failed to update note orders")

        updated = len(items) - len(failed_ids)
        if failed_ids:
            raise PartialBatchError("Failed to update some note orders", failed_ids, updated)

        logger.info("Notes reordered", updated=updated)
        return updated
