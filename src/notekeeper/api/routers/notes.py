from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from ...schemas import Note, NoteEnvelope, NoteIn, NoteListEnvelope
from ..store import NoteStore
from ..utils import data_envelope

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
)

_ERRORS = {
    404: {"description": "Note not found"},
    422: {"description": "Validation error"},
    500: {"description": "Storage failure"},
}


def get_store(request: Request) -> NoteStore:
    """
    Dependency returning the NoteStore owned by the running app.
    """
    return request.app.state.note_store


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=NoteListEnvelope,
    summary="List Notes",
    description=(
        "List all notes in creation order.\n\n"
        "Query parameters:\n"
        "- title: optional case-insensitive substring filter on the title"
    ),
    responses={200: {"description": "List retrieved successfully"}, 500: _ERRORS[500]},
)
def list_notes(
    title: Optional[str] = Query(None, description="Search text for the title"),
    store: NoteStore = Depends(get_store),
) -> NoteListEnvelope:
    """
    List notes, optionally filtered by title.
    """
    notes = store.list(title)
    return NoteListEnvelope(**data_envelope(Note(**n) for n in notes))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=NoteEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create Note",
    description="Create a new note and return it with its server-assigned id and created_at.",
    responses={201: {"description": "Note created"}, 422: _ERRORS[422], 500: _ERRORS[500]},
)
def create_note(payload: NoteIn, store: NoteStore = Depends(get_store)) -> NoteEnvelope:
    """
    Create a new note.
    """
    created = store.create(payload.title, payload.content)
    return NoteEnvelope(**data_envelope(Note(**created)))


# PUBLIC_INTERFACE
@router.get(
    "/{note_id}",
    response_model=NoteEnvelope,
    summary="Get Note",
    description="Get a single note by id.",
    responses={200: {"description": "Note found"}, 404: _ERRORS[404], 500: _ERRORS[500]},
)
def get_note(
    note_id: int = Path(..., description="Note id"),
    store: NoteStore = Depends(get_store),
) -> NoteEnvelope:
    """
    Retrieve a single note by its id.
    """
    return NoteEnvelope(**data_envelope(Note(**store.get(note_id))))


# PUBLIC_INTERFACE
@router.put(
    "/{note_id}",
    response_model=NoteEnvelope,
    summary="Update Note",
    description="Overwrite the title and content of a note. id and created_at never change.",
    responses={200: {"description": "Note updated"}, **_ERRORS},
)
def update_note(
    payload: NoteIn,
    note_id: int = Path(..., description="Note id"),
    store: NoteStore = Depends(get_store),
) -> NoteEnvelope:
    """
    Replace title and content of an existing note.
    """
    updated = store.update(note_id, payload.title, payload.content)
    return NoteEnvelope(**data_envelope(Note(**updated)))


# PUBLIC_INTERFACE
@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Note",
    description="Permanently delete a note by id.",
    responses={204: {"description": "Note deleted"}, 404: _ERRORS[404], 500: _ERRORS[500]},
)
def delete_note(
    note_id: int = Path(..., description="Note id"),
    store: NoteStore = Depends(get_store),
) -> Response:
    """
    Delete a note. Returns 204 on success, 404 if not found.
    """
    store.delete(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
