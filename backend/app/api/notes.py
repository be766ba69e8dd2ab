from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from app.exceptions import NotFoundError
from app.models.notes import (
    ErrorEnvelope,
    NoteCreate,
    NoteEnvelope,
    NoteListEnvelope,
    NoteOut,
    NoteUpdate,
)
from app.services.notes_service import NoteService
from app.storage.notes_store import Note

router = APIRouter(prefix="/notes", tags=["notes"])

NOT_FOUND = {404: {"model": ErrorEnvelope, "description": "Note not found"}}
INVALID = {400: {"model": ErrorEnvelope, "description": "Validation error"}}


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


def _out(note: Note) -> NoteOut:
    return NoteOut(**note.to_dict())


@router.get("", response_model=NoteListEnvelope, summary="List notes")
def list_notes(service: NoteService = Depends(get_note_service)) -> NoteListEnvelope:
    """Return every note, ordered by insertion."""
    return NoteListEnvelope(data=[_out(n) for n in service.list_notes()])


@router.get("/{note_id}", response_model=NoteEnvelope, responses=NOT_FOUND, summary="Get note by ID")
def get_note(note_id: str, service: NoteService = Depends(get_note_service)) -> NoteEnvelope:
    note = service.get_note(note_id)
    if note is None:
        raise NotFoundError(note_id)
    return NoteEnvelope(data=_out(note))


# Bodies are taken as raw JSON so the service can report every failed rule;
# NoteCreate/NoteUpdate only describe them in the OpenAPI docs.
@router.post(
    "",
    response_model=NoteEnvelope,
    status_code=201,
    responses=INVALID,
    summary="Create a new note",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": NoteCreate.model_json_schema()}},
        }
    },
)
def create_note(
    payload: Any = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> NoteEnvelope:
    return NoteEnvelope(data=_out(service.create_note(payload)))


@router.put(
    "/{note_id}",
    response_model=NoteEnvelope,
    responses={**NOT_FOUND, **INVALID},
    summary="Update an existing note",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": NoteUpdate.model_json_schema()}},
        }
    },
)
def update_note(
    note_id: str,
    payload: Any = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> NoteEnvelope:
    return NoteEnvelope(data=_out(service.update_note(note_id, payload)))


@router.delete("/{note_id}", status_code=204, responses=NOT_FOUND, summary="Delete a note")
def delete_note(note_id: str, service: NoteService = Depends(get_note_service)) -> Response:
    if not service.delete_note(note_id):
        raise NotFoundError(note_id)
    return Response(status_code=204)
