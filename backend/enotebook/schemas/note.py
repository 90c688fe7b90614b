"""
ENotebook Backend — Note Request/Response Schemas
===================================================

What:  Pydantic models defining the /api/notes contract.
Who:   Used by the notes routes as request bodies and response models.

Validation rules:
    title        4 to 255 characters
    description  ≥ 6 characters
    tag          optional, at most 100 characters; "General" when omitted

Unknown body keys (including any client-sent "owner") are ignored: the owner
of a note always comes from the authenticated identity.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from enotebook.schemas.common import as_utc

TITLE_MIN_LENGTH = 4
TITLE_MAX_LENGTH = 255  # notes.title is VARCHAR(255)
DESCRIPTION_MIN_LENGTH = 6


def check_title(value: str) -> str:
    if len(value) < TITLE_MIN_LENGTH:
        raise PydanticCustomError("title_too_short", "Enter a valid title")
    if len(value) > TITLE_MAX_LENGTH:
        raise PydanticCustomError(
            "title_too_long", f"Title must be at most {TITLE_MAX_LENGTH} chars"
        )
    return value


def check_description(value: str) -> str:
    if len(value) < DESCRIPTION_MIN_LENGTH:
        raise PydanticCustomError("description_too_short", "Enter a valid description")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(BaseModel):
    """Body of POST /api/notes/add-note."""

    title: str
    description: str
    tag: Optional[str] = Field(default=None, max_length=100)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return check_title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return check_description(v)


class NoteUpdateRequest(BaseModel):
    """
    Body of PUT /api/notes/update-note/{id}.

    Partial update: a field that is missing, null or an empty string is left
    untouched on the stored note. Non-empty values must pass the same rules
    as on creation.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    tag: Optional[str] = Field(default=None, max_length=100)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        return v if not v else check_title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return v if not v else check_description(v)

    def changes(self) -> dict:
        """The fields that should overwrite the stored note."""
        return {
            key: value
            for key, value in self.model_dump().items()
            if value
        }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a note."""

    id: uuid.UUID
    owner: uuid.UUID
    title: str
    description: str
    tag: str
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class SavedNoteEnvelope(BaseModel):
    """Returned by add-note with HTTP 201."""

    message: str
    saved_note: NoteResponse = Field(serialization_alias="savedNote")


class UpdatedNoteEnvelope(BaseModel):
    message: str
    updated_note: NoteResponse = Field(serialization_alias="updatedNote")


class DeletedNoteEnvelope(BaseModel):
    message: str
    deleted_note: NoteResponse = Field(serialization_alias="deletedNote")
