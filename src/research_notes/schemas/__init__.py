from src.research_notes.schemas.note import (
    NoteCreate,
    NoteListResponse,
    NoteOrder,
    NoteRead,
    NoteReorderRequest,
    NoteReorderResponse,
    NoteResponse,
    NoteTab,
    NoteUpdate,
)
from src.research_notes.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
    ProjectUpdate,
)

__all__ = [
    # Note
    "NoteCreate",
    "NoteListResponse",
    "NoteOrder",
    "NoteRead",
    "NoteReorderRequest",
    "NoteReorderResponse",
    "NoteResponse",
    "NoteTab",
    "NoteUpdate",
    # Project
    "ProjectCreate",
    "ProjectListResponse",
    "ProjectRead",
    "ProjectResponse",
    "ProjectUpdate",
]
