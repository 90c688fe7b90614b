"""
ENotebook Backend — Notes Route Handlers
==========================================

What:  /api/notes: CRUD over the authenticated user's notes.
How:   Every route depends on the auth guard; the resolved user id is passed
       to NoteService, which enforces ownership.

Route Inventory:
    GET    /api/notes/fetch-all-notes       200 [note, ...]
    POST   /api/notes/add-note              201 {message, savedNote}
    PUT    /api/notes/update-note/{id}      200 {message, updatedNote}
    DELETE /api/notes/delete-note/{id}      200 {message, deletedNote}

Path ids are taken as plain strings so a malformed id reaches the service
and comes back as a 400 "Invalid note id" instead of a schema error.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from enotebook.database import get_db_session
from enotebook.dependencies import get_current_user_id
from enotebook.schemas.common import ErrorResponse, ValidationErrorResponse
from enotebook.schemas.note import (
    DeletedNoteEnvelope,
    NoteCreateRequest,
    NoteResponse,
    NoteUpdateRequest,
    SavedNoteEnvelope,
    UpdatedNoteEnvelope,
)
from enotebook.services.note_service import note_service

router = APIRouter(prefix="/api/notes", tags=["Notes"])

_owned_note_errors = {
    400: {"description": "Malformed note id or invalid fields", "model": ErrorResponse},
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    403: {"description": "Note belongs to another user", "model": ErrorResponse},
    404: {"description": "Note not found", "model": ErrorResponse},
}


@router.get(
    "/fetch-all-notes",
    response_model=List[NoteResponse],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="List my notes",
    description="Returns every note owned by the authenticated user, newest first.",
)
async def fetch_all_notes(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_mine(db, user_id)


@router.post(
    "/add-note",
    status_code=201,
    response_model=SavedNoteEnvelope,
    responses={
        400: {"description": "Invalid fields", "model": ValidationErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Add a note",
)
async def add_note(
    body: NoteCreateRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> SavedNoteEnvelope:
    return await note_service.add_note(db, user_id, body)


@router.put(
    "/update-note/{note_id}",
    response_model=UpdatedNoteEnvelope,
    responses=_owned_note_errors,
    summary="Update a note",
    description="Changes only the fields sent; omitted or empty fields keep their value.",
)
async def update_note(
    note_id: str,
    body: Optional[NoteUpdateRequest] = None,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> UpdatedNoteEnvelope:
    # No body is an update with no fields
    return await note_service.update_note(db, user_id, note_id, body or NoteUpdateRequest())


@router.delete(
    "/delete-note/{note_id}",
    response_model=DeletedNoteEnvelope,
    responses=_owned_note_errors,
    summary="Delete a note",
    description="Deletes the note and returns it as it was before deletion.",
)
async def delete_note(
    note_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> DeletedNoteEnvelope:
    return await note_service.delete_note(db, user_id, note_id)
