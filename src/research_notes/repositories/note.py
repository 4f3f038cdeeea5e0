"""Repository for Note entity."""

from uuid import UUID

from sqlalchemy import delete, func, update
from sqlmodel import select

from src.research_notes.models import Note
from src.research_notes.models.base import utc_now
from src.research_notes.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """Repository for the notes table."""

    model = Note

    async def list_by_project(self, project_id: UUID) -> list[Note]:
        """List a project's notes in display order (creation time breaks ties)."""
        result = await self.session.execute(
            select(Note)
            .where(Note.project_id == project_id)
            .order_by(Note.display_order.asc(), Note.created_at.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def next_display_order(self, project_id: UUID) -> int:
        """Return max(display_order) + 1 for the project, 0 when it has no notes."""
        result = await self.session.execute(
            select(func.max(Note.display_order)).where(Note.project_id == project_id)
        )
        current = result.scalar_one_or_none()
        return 0 if current is None else current + 1

    async def set_display_order(self, note_id: UUID, order: int) -> bool:
        """Write one note's display_order. Returns False if the note does not exist."""
        result = await self.session.execute(
            update(Note)
            .where(Note.id == note_id)  # type: ignore[arg-type]
            .values(display_order=order, updated_at=utc_now())
        )
        return result.rowcount > 0

    async def delete_by_project(self, project_id: UUID) -> int:
        """Delete every note of a project. Returns the number of rows removed."""
        result = await self.session.execute(delete(Note).where(Note.project_id == project_id))
        return result.rowcount
