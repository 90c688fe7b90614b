"""
ENotebook Backend — Note Service (Ownership-Checked CRUD)
===========================================================

What:  List, create, update and delete notes for the authenticated user.
How:   Every operation receives the identity resolved by the auth guard.
       Mutations load the note, compare its owner with that identity, and
       only then touch the row.
Who:   Called by the /api/notes route handlers.

Update/Delete Flow:
    ┌──────────┐   ┌───────────┐   ┌──────────┐   ┌──────────────┐
    │ parse id │──▶│  SELECT   │──▶│  owner   │──▶│ UPDATE or    │
    │ (400)    │   │  (404)    │   │  (403)   │   │ DELETE       │
    └──────────┘   └───────────┘   └──────────┘   └──────────────┘

    A malformed id is rejected before the database is queried.

Concurrency:
    No optimistic locking; two concurrent updates of one note are
    last-write-wins.
"""

import logging
import uuid
from typing import List, Union

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from enotebook.exceptions import (
    DatabaseError,
    ENotebookError,
    ForbiddenError,
    NotFoundError,
)
from enotebook.models.note import DEFAULT_TAG, Note
from enotebook.schemas.note import (
    DeletedNoteEnvelope,
    NoteCreateRequest,
    NoteResponse,
    NoteUpdateRequest,
    SavedNoteEnvelope,
    UpdatedNoteEnvelope,
)
from enotebook.utils import parse_id

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Stateless: the session and identity arrive with each call.
    """

    async def _owned_note(
        self, db: AsyncSession, owner: uuid.UUID, note_id: uuid.UUID
    ) -> Note:
        """
        Load a note and check that `owner` may modify it.

        Raises:
            NotFoundError: No note with this id (→ 404)
            ForbiddenError: The note belongs to someone else (→ 403)
        """
        result = await db.execute(select(Note).where(Note.id == note_id))
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        if note.owner != owner:
            logger.warning("User %s tried to modify note %s owned by %s", owner, note_id, note.owner)
            raise ForbiddenError(context={"note_id": str(note_id)})
        return note

    async def list_mine(self, db: AsyncSession, owner: uuid.UUID) -> List[NoteResponse]:
        """
        All notes owned by `owner`, newest first.

        Query plan:
            SELECT * FROM notes WHERE owner = :owner ORDER BY created_at DESC
            → idx_notes_owner_created_at
        """
        try:
            result = await db.execute(
                select(Note).where(Note.owner == owner).order_by(desc(Note.created_at))
            )
            notes = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing notes for %s: %s", owner, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [NoteResponse.model_validate(note) for note in notes]

    async def add_note(
        self, db: AsyncSession, owner: uuid.UUID, request: NoteCreateRequest
    ) -> SavedNoteEnvelope:
        """Create a note owned by `owner`. The tag defaults to "General"."""
        try:
            note = Note(
                id=uuid.uuid4(),
                owner=owner,
                title=request.title,
                description=request.description,
                tag=request.tag or DEFAULT_TAG,
            )
            db.add(note)
            await db.flush()  # applies the created_at default
            await db.commit()
        except Exception as e:
            logger.error("Database error adding note for %s: %s", owner, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note %s created by %s", note.id, owner)
        return SavedNoteEnvelope(
            message="Note added successfully",
            saved_note=NoteResponse.model_validate(note),
        )

    async def update_note(
        self,
        db: AsyncSession,
        owner: uuid.UUID,
        raw_id: Union[str, uuid.UUID],
        request: NoteUpdateRequest,
    ) -> UpdatedNoteEnvelope:
        """
        Overwrite only the fields present in the request.

        Raises:
            InvalidIdError: Malformed id (→ 400)
            NotFoundError: No such note (→ 404)
            ForbiddenError: Not the owner (→ 403)
        """
        note_id = parse_id(raw_id, "note")
        try:
            note = await self._owned_note(db, owner, note_id)
            for field, value in request.changes().items():
                setattr(note, field, value)
            await db.commit()
        except ENotebookError:
            raise
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": str(note_id)},
            )

        logger.info("Note %s updated by %s", note_id, owner)
        return UpdatedNoteEnvelope(
            message="Note updated successfully",
            updated_note=NoteResponse.model_validate(note),
        )

    async def delete_note(
        self,
        db: AsyncSession,
        owner: uuid.UUID,
        raw_id: Union[str, uuid.UUID],
    ) -> DeletedNoteEnvelope:
        """
        Delete a note and return the record as it was.

        Raises:
            InvalidIdError: Malformed id, checked before any query (→ 400)
            NotFoundError: No such note (→ 404)
            ForbiddenError: Not the owner (→ 403)
        """
        note_id = parse_id(raw_id, "note")
        try:
            note = await self._owned_note(db, owner, note_id)
            deleted = NoteResponse.model_validate(note)
            await db.delete(note)
            await db.commit()
        except ENotebookError:
            raise
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(note_id)},
            )

        logger.info("Note %s deleted by %s", note_id, owner)
        return DeletedNoteEnvelope(
            message="Note deleted successfully",
            deleted_note=deleted,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
