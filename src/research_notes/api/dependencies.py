"""FastAPI dependency injection definitions."""

from typing import Annotated

from fastapi import Depends, Request

from src.research_notes.store import NotesStore


def get_store(request: Request) -> NotesStore:
    """Return the process-wide store built in the app lifespan (or passed to create_app)."""
    return request.app.state.store


Store = Annotated[NotesStore, Depends(get_store)]
