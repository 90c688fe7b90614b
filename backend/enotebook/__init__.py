"""
ENotebook Backend — Application Package Initializer
=====================================================

What: Marks the `enotebook` directory as a Python package.
Who:  Imported by uvicorn (`enotebook.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Routes (API Layer) + Auth Guard   │  ← HTTP concerns, identity injection
    ├─────────────────────────────────────┤
    │  Services (Account, Note, Token)    │  ← Validation results, ownership, hashing
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never talk to the database directly; services never see HTTP objects.
"""

__version__ = "1.0.0"
