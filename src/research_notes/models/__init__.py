"""Model exports.

Import from here: `from src.research_notes.models import Project, Note`
"""

from src.research_notes.models.note import Note
from src.research_notes.models.project import Project

__all__ = [
    "Note",
    "Project",
]
