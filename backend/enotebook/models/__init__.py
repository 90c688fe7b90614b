"""ORM models. Importing this package registers every table on Base.metadata."""

from enotebook.models.note import Note
from enotebook.models.user import User

__all__ = ["Note", "User"]
