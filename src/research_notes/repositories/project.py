"""Repository for Project entity."""

from sqlmodel import select

from src.research_notes.models import Project
from src.research_notes.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for the projects table."""

    model = Project

    async def list_all(self) -> list[Project]:
        """List all projects, newest first."""
        result = await self.session.execute(
            select(Project).order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
