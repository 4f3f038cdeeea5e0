"""Project model - named container for notes."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.research_notes.models.base import utc_now


class Project(SQLModel, table=True):
    """Project entity.

    Deleting a project removes its notes (see NotesStore.delete_project and
    the ON DELETE CASCADE foreign key on notes.project_id).
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
