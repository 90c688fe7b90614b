"""
ENotebook Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table (the credential store).
Who:   Used by AccountService for registration, login and administration.

Security:
    Only the bcrypt hash is stored. The hash never leaves the service layer;
    response schemas exclude it.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from enotebook.database import Base


class User(Base):
    """A registered account. Exactly one row per email (unique index)."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash; plaintext is never stored",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        # No password hash in the repr: it ends up in logs and tracebacks
        return f"<User(id={self.id}, email='{self.email}')>"
