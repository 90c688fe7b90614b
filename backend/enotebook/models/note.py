"""
ENotebook Backend — Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by NoteService for CRUD operations.

Table Design:
    - UUID primary key generated in Python (works on PostgreSQL and SQLite)
    - owner: UUID of the creating user. Deliberately NOT a foreign key:
      deleting a user leaves their notes in place with a dangling owner.
    - tag: defaults to "General" at both ORM and server level
    - created_at: timezone-aware UTC timestamp

    Composite index (owner, created_at):
        Serves the only list query, "notes of this owner, newest first".
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from enotebook.database import Base

DEFAULT_TAG = "General"


class Note(Base):
    """
    A note owned by a single user.

    Lifecycle:
        1. Created by add-note with owner = authenticated user id
        2. Fields selectively replaced by update-note (owner only)
        3. Removed by delete-note (owner only)
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique note identifier",
    )

    owner: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        comment="Id of the user who created the note",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    tag: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default=DEFAULT_TAG,
        server_default=text(f"'{DEFAULT_TAG}'"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_owner_created_at", owner, created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, owner={self.owner}, title='{self.title}')>"
