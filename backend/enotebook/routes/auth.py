"""
ENotebook Backend — Account Route Handlers
============================================

What:  /api/auth: registration, login, current user, user administration.
How:   FastAPI validates the body against the request schema, the handler
       delegates to AccountService and returns its response schema.

Route Inventory:
    POST   /api/auth/create-user        public        201 {message, authToken}
    POST   /api/auth/login              public        200 {message, authToken}
    POST   /api/auth/get-user           token         200 {message, user}
    GET    /api/auth/fetch-all-users    token*        200 [user, ...]
    GET    /api/auth/fetch-user/{id}    token*        200 {message, user}
    PUT    /api/auth/update-user/{id}   token* (own)  200 {message, user}
    DELETE /api/auth/delete-user/{id}   token* (own)  200 {message}

    * unless USER_ADMIN_REQUIRES_AUTH=false
    (own): the path id must be the token's user id, otherwise 403
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from enotebook.database import get_db_session
from enotebook.dependencies import get_current_user_id, require_user_admin_auth
from enotebook.schemas.common import ErrorResponse, ValidationErrorResponse
from enotebook.schemas.user import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
    UserEnvelope,
    UserResponse,
    UserUpdateRequest,
)
from enotebook.services.account_service import account_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])

_unauthorized = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}
_invalid = {400: {"description": "Invalid input", "model": ValidationErrorResponse}}
_not_found = {404: {"description": "User not found", "model": ErrorResponse}}
_forbidden = {403: {"description": "Token belongs to another user", "model": ErrorResponse}}


@router.post(
    "/create-user",
    status_code=201,
    response_model=TokenResponse,
    responses={**_invalid},
    summary="Register a user",
    description=(
        "Creates an account and returns an identity token. "
        "Fails with 400 when a field is invalid or the email is already registered."
    ),
)
async def create_user(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await account_service.register(db, body)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={**_invalid},
    summary="Log in",
    description="Exchanges email and password for an identity token.",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await account_service.login(db, body)


@router.post(
    "/get-user",
    response_model=UserEnvelope,
    responses={**_unauthorized, **_not_found},
    summary="Get the logged-in user",
)
async def get_user(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    return await account_service.get_current_user(db, user_id)


# ── Administration ────────────────────────────────────────────────────────


@router.get(
    "/fetch-all-users",
    response_model=List[UserResponse],
    responses={**_unauthorized},
    dependencies=[Depends(require_user_admin_auth)],
    summary="List all users",
)
async def fetch_all_users(
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    return await account_service.list_users(db)


@router.get(
    "/fetch-user/{user_id}",
    response_model=UserEnvelope,
    responses={**_invalid, **_unauthorized, **_not_found},
    dependencies=[Depends(require_user_admin_auth)],
    summary="Get a user by id",
)
async def fetch_user(
    user_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    return await account_service.get_user(db, user_id)


@router.put(
    "/update-user/{user_id}",
    response_model=UserEnvelope,
    responses={**_invalid, **_unauthorized, **_forbidden, **_not_found},
    summary="Update a user",
    description=(
        "Changes only the fields sent. A new password is hashed before storage. "
        "With a token, only the token's own account may be changed."
    ),
)
async def update_user(
    user_id: str,
    body: UserUpdateRequest,
    actor: Optional[uuid.UUID] = Depends(require_user_admin_auth),
    db: AsyncSession = Depends(get_db_session),
) -> UserEnvelope:
    return await account_service.update_user(db, user_id, body, actor=actor)


@router.delete(
    "/delete-user/{user_id}",
    response_model=MessageResponse,
    responses={**_invalid, **_unauthorized, **_forbidden, **_not_found},
    summary="Delete a user",
    description=(
        "Removes the account. The user's notes are not deleted. "
        "With a token, only the token's own account may be removed."
    ),
)
async def delete_user(
    user_id: str,
    actor: Optional[uuid.UUID] = Depends(require_user_admin_auth),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await account_service.delete_user(db, user_id, actor=actor)
