"""Repository layer - data access abstraction."""

from src.research_notes.repositories.base import BaseRepository
from src.research_notes.repositories.note import NoteRepository
from src.research_notes.repositories.project import ProjectRepository

__all__ = [
    "BaseRepository",
    "NoteRepository",
    "ProjectRepository",
]
