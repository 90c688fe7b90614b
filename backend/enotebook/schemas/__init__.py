"""Pydantic API contracts, kept separate from the ORM models."""
