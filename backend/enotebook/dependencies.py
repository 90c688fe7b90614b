"""
ENotebook Backend — Auth Guard
================================

What:  FastAPI dependencies that turn the auth header into a user id.
How:   Reads the token from the configured header (default `auth-token`),
       verifies it with the token service, stores the id on
       `request.state.user_id` and returns it to the route.
Who:   Every protected route depends on `get_current_user_id`; the user
       administration routes depend on `require_user_admin_auth`.

States per request:
    Unauthenticated ──(valid token)──▶ Authenticated → route handler runs
          │
          └──(missing / invalid token)──▶ 401, handler never runs

    The guard never touches the database.
"""

import logging
import uuid
from typing import Optional

from fastapi import Request, Security
from fastapi.security import APIKeyHeader

from enotebook.config import settings
from enotebook.exceptions import InvalidTokenError, UnauthorizedError
from enotebook.middleware.request_id import request_id_var
from enotebook.services.token_service import token_service

logger = logging.getLogger(__name__)

auth_token_header = APIKeyHeader(
    name=settings.auth_header_name,
    auto_error=False,
    description="Identity token returned by create-user or login",
)


async def get_current_user_id(
    request: Request,
    token: Optional[str] = Security(auth_token_header),
) -> uuid.UUID:
    """
    Resolve the authenticated user id or reject the request.

    Raises:
        UnauthorizedError: Header missing, or token fails verification (→ 401)
    """
    rid = request_id_var.get("")
    if not token:
        logger.info("[%s] Rejected %s: missing token", rid, request.url.path)
        raise UnauthorizedError(context={"reason": "missing token"})

    try:
        user_id = token_service.verify(token)
    except InvalidTokenError as e:
        logger.info("[%s] Rejected %s: %s", rid, request.url.path, e.reason)
        raise UnauthorizedError(context={"reason": e.reason})

    request.state.user_id = user_id
    return user_id


async def require_user_admin_auth(
    request: Request,
    token: Optional[str] = Security(auth_token_header),
) -> Optional[uuid.UUID]:
    """
    Guard for the user administration routes.

    Same as get_current_user_id unless USER_ADMIN_REQUIRES_AUTH is false,
    in which case the routes stay open and no identity is resolved.
    """
    if not settings.user_admin_requires_auth:
        return None
    return await get_current_user_id(request, token)
