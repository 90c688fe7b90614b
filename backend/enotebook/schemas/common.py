"""
ENotebook Backend — Shared Response Schemas
=============================================

What:  Error envelopes and the health check payload.
Why:   Clients parse one error shape no matter which route failed; the
       schemas also document those shapes in the OpenAPI output.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


def as_utc(value: datetime) -> datetime:
    """Timestamps are stored in UTC; SQLite returns them without tzinfo."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ErrorResponse(BaseModel):
    """
    Error envelope for every non-validation failure.

    Example:
        {"error": "Note not found", "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class FieldError(BaseModel):
    field: str = Field(description="Name of the offending field")
    msg: str = Field(description="What is wrong with it")
    location: str = Field(description="Where the field was read from: body, path, header")


class ValidationErrorResponse(BaseModel):
    """
    Error envelope for field-level validation failures (HTTP 400).

    Example:
        {"errors": [{"field": "email", "msg": "Invalid email", "location": "body"}]}
    """
    errors: List[FieldError]
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Returned by GET /health for load balancer and container probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    auth: str = Field(description="Token signing: configured, missing secret")
    uptime_seconds: float = Field(description="Seconds since service started")
