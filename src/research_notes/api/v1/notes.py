"""Note endpoints addressed by note id, plus batch reordering."""

from uuid import UUID

from fastapi import APIRouter, Response, status

from src.research_notes.api.dependencies import Store
from src.research_notes.schemas import (
    NoteRead,
    NoteReorderRequest,
    NoteReorderResponse,
    NoteResponse,
    NoteUpdate,
)

router = APIRouter(prefix="/notes", tags=["notes"])


# Registered before /{note_id} so "reorder" is not parsed as an id.
@router.put(
    "/reorder",
    response_model=NoteReorderResponse,
    summary="Reorder notes",
    description=(
        "Write display_order for each {id, order} pair. Updates are applied "
        "independently: when some fail, the rest stay applied and the response "
        "lists the failed ids."
    ),
    responses={
        200: {"description": "All orders written"},
        400: {"description": "Empty or malformed noteOrders"},
        500: {"description": "Some or all orders could not be written"},
    },
)
async def reorder_notes(request: NoteReorderRequest, store: Store) -> NoteReorderResponse:
    updated = await store.reorder_notes(request.note_orders)
    return NoteReorderResponse(message="Note orders updated successfully", updated=updated)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get note",
    responses={404: {"description": "Note not found"}},
)
async def get_note(note_id: UUID, store: Store) -> NoteResponse:
    note = await store.get_note(note_id)
    return NoteResponse(note=NoteRead.model_validate(note))


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update note",
    description="Update the fields present in the body. updated_at is always refreshed.",
    responses={
        200: {"description": "Note updated"},
        400: {"description": "Invalid note fields"},
        404: {"description": "Note not found"},
    },
)
async def update_note(note_id: UUID, request: NoteUpdate, store: Store) -> NoteResponse:
    note = await store.update_note(note_id, request)
    return NoteResponse(note=NoteRead.model_validate(note))


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete note",
    description="Delete a note. Unknown ids are not an error.",
)
async def delete_note(note_id: UUID, store: Store) -> Response:
    await store.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
