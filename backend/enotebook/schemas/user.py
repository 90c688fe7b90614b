"""
ENotebook Backend — Account Request/Response Schemas
======================================================

What:  Pydantic models defining the /api/auth contract.
How:   FastAPI validates request bodies against these models before a route
       runs; failures are reformatted into the 400 {"errors": [...]} envelope
       by the handler in main.py.

Validation rules:
    name      4 to 255 characters
    email     syntactically valid (email-validator, no DNS lookups). The
              reserved .test domain is accepted; other special-use names
              (.local, .localhost, .invalid, ...) are rejected
    password  ≥ 6 characters, ≤ 72 bytes (bcrypt only reads 72 bytes)

    One password minimum is used everywhere (register, login, update) so a
    password accepted at registration is always accepted at login.
"""

import uuid
from datetime import datetime
from typing import Optional

import email_validator
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from enotebook.schemas.common import as_utc

NAME_MIN_LENGTH = 4
NAME_MAX_LENGTH = 255  # users.name is VARCHAR(255)
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72


# ══════════════════════════════════════════════════════════════════════════
# Field rules, shared by every model that accepts the field
# ══════════════════════════════════════════════════════════════════════════

def check_name(value: str) -> str:
    if len(value) < NAME_MIN_LENGTH:
        raise PydanticCustomError(
            "name_too_short", f"Name must be at least {NAME_MIN_LENGTH} chars"
        )
    if len(value) > NAME_MAX_LENGTH:
        raise PydanticCustomError(
            "name_too_long", f"Name must be at most {NAME_MAX_LENGTH} chars"
        )
    return value


def check_email(value: str) -> str:
    try:
        return email_validator.validate_email(
            value, check_deliverability=False, test_environment=True
        ).normalized
    except email_validator.EmailNotValidError:
        raise PydanticCustomError("email_invalid", "Invalid email")


def check_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise PydanticCustomError("password_too_short", "Password too short")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise PydanticCustomError(
            "password_too_long", f"Password must be at most {PASSWORD_MAX_BYTES} bytes"
        )
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    """Body of POST /api/auth/create-user."""

    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)


class LoginRequest(BaseModel):
    """Body of POST /api/auth/login."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password(v)


class UserUpdateRequest(BaseModel):
    """
    Body of PUT /api/auth/update-user/{id}.

    Every field is optional; only the fields sent are validated and changed.
    A new password is hashed by the service before it is stored.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else check_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else check_password(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(BaseModel):
    """Public view of a user. The password hash is never part of it."""

    id: uuid.UUID
    name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class TokenResponse(BaseModel):
    """Returned by create-user (201) and login (200)."""

    message: str
    auth_token: str = Field(serialization_alias="authToken")


class UserEnvelope(BaseModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
