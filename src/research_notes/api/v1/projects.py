"""Project endpoints and the notes collection nested under a project."""

from uuid import UUID

from fastapi import APIRouter, Response, status

from src.research_notes.api.dependencies import Store
from src.research_notes.schemas import (
    NoteCreate,
    NoteListResponse,
    NoteRead,
    NoteResponse,
    ProjectCreate,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List projects",
    description="List all projects, newest first.",
)
async def list_projects(store: Store) -> ProjectListResponse:
    projects = await store.list_projects()
    return ProjectListResponse(projects=[ProjectRead.model_validate(p) for p in projects])


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
        400: {"description": "Invalid name or description"},
    },
)
async def create_project(request: ProjectCreate, store: Store) -> ProjectResponse:
    """Create a project. Name and description are stored trimmed."""
    project = await store.create_project(request)
    return ProjectResponse(project=ProjectRead.model_validate(project))


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(project_id: UUID, store: Store) -> ProjectResponse:
    project = await store.get_project(project_id)
    return ProjectResponse(project=ProjectRead.model_validate(project))


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Update project",
    description="Update the fields present in the body. updated_at is always refreshed.",
    responses={
        200: {"description": "Project updated"},
        400: {"description": "Invalid name or description"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    store: Store,
) -> ProjectResponse:
    project = await store.update_project(project_id, request)
    return ProjectResponse(project=ProjectRead.model_validate(project))


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Delete a project and all of its notes. Unknown ids are not an error.",
)
async def delete_project(project_id: UUID, store: Store) -> Response:
    await store.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{project_id}/notes",
    response_model=NoteListResponse,
    summary="List notes",
    description="List a project's notes by display_order, then creation time.",
)
async def list_notes(project_id: UUID, store: Store) -> NoteListResponse:
    notes = await store.list_notes(project_id)
    return NoteListResponse(notes=[NoteRead.model_validate(n) for n in notes])


@router.post(
    "/{project_id}/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create note",
    description=(
        "Create a note at the end of the project's display order. "
        "A note without content or tabs starts with the built-in tabs."
    ),
    responses={
        201: {"description": "Note created"},
        400: {"description": "Invalid note fields"},
        404: {"description": "Project not found"},
    },
)
async def create_note(
    project_id: UUID,
    request: NoteCreate,
    store: Store,
) -> NoteResponse:
    note = await store.create_note(project_id, request)
    return NoteResponse(note=NoteRead.model_validate(note))
