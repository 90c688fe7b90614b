"""
ENotebook Backend — Account Service
=====================================

What:  Registration, login, current-user lookup and user administration.
How:   Works on validated request schemas, the users table, the password
       hashing helpers and the token service.
Who:   Called by the /api/auth route handlers.

Registration Flow:
    ┌──────────┐   ┌──────────────┐   ┌──────────┐   ┌─────────┐   ┌────────┐
    │ Validated│──▶│ Email taken? │──▶│  bcrypt  │──▶│ INSERT  │──▶│  sign  │
    │  schema  │   │  (400)       │   │  hash    │   │ users   │   │ token  │
    └──────────┘   └──────────────┘   └──────────┘   └─────────┘   └────────┘

Error Handling Strategy:
    Application exceptions (DuplicateEmailError, NotFoundError, ...) propagate
    unchanged. A unique-constraint violation at flush or commit time means a concurrent
    registration won the race and is reported as DuplicateEmailError. Anything
    else from the driver becomes DatabaseError (generic 500).
"""

import logging
import uuid
from typing import List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from enotebook.exceptions import (
    DatabaseError,
    DuplicateEmailError,
    ENotebookError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
)
from enotebook.models.user import User
from enotebook.schemas.user import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
    UserEnvelope,
    UserResponse,
    UserUpdateRequest,
)
from enotebook.security import hash_password, verify_password
from enotebook.services.token_service import token_service
from enotebook.utils import parse_id

logger = logging.getLogger(__name__)


class AccountService:
    """
    Business logic for user accounts.

    Responsibilities:
        - register() / login(): credential checks and token issuance
        - get_current_user(): profile of the authenticated identity
        - list_users() / get_user() / update_user() / delete_user(): administration
    """

    async def _find_by_email(self, db: AsyncSession, email: str) -> User | None:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def _find_by_id(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    def _check_self(self, actor: Optional[uuid.UUID], user_id: uuid.UUID) -> None:
        """An authenticated caller may only change or remove their own account."""
        if actor is not None and actor != user_id:
            logger.warning("User %s tried to modify account %s", actor, user_id)
            raise ForbiddenError(context={"user_id": str(user_id)})

    async def register(self, db: AsyncSession, request: RegisterRequest) -> TokenResponse:
        """
        Create an account and return a token for it.

        Raises:
            DuplicateEmailError: Email already registered (→ 400)
            DatabaseError: Store failure (→ 500)
        """
        try:
            if await self._find_by_email(db, request.email) is not None:
                raise DuplicateEmailError()

            user = User(
                id=uuid.uuid4(),
                name=request.name,
                email=request.email,
                password_hash=await hash_password(request.password),
            )
            db.add(user)
            await db.flush()
            await db.commit()
        except ENotebookError:
            raise
        except IntegrityError:
            raise DuplicateEmailError(context={"source": "unique constraint"})
        except Exception as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the account. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User registered: %s", user.id)
        return TokenResponse(
            message="User added successfully",
            auth_token=token_service.issue(user.id),
        )

    async def login(self, db: AsyncSession, request: LoginRequest) -> TokenResponse:
        """
        Exchange email and password for a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password (→ 400)
        """
        try:
            user = await self._find_by_email(db, request.email)
        except Exception as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not log in. Please try again.",
                context={"error_type": type(e).__name__},
            )

        if user is None or not await verify_password(request.password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()

        logger.info("User logged in: %s", user.id)
        return TokenResponse(
            message="User logged in successfully",
            auth_token=token_service.issue(user.id),
        )

    async def get_current_user(self, db: AsyncSession, user_id: uuid.UUID) -> UserEnvelope:
        """
        Profile of the authenticated user.

        Tokens outlive deleted accounts, so a valid token can still point at
        a user that no longer exists.

        Raises:
            NotFoundError: The token's user id no longer resolves (→ 404)
        """
        try:
            user = await self._find_by_id(db, user_id)
        except ENotebookError:
            raise
        except Exception as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})

        return UserEnvelope(
            message="User fetched successfully",
            user=UserResponse.model_validate(user),
        )

    # ── Administration ────────────────────────────────────────────────────

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        try:
            result = await db.execute(select(User).order_by(User.created_at))
            users = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve users. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [UserResponse.model_validate(user) for user in users]

    async def get_user(self, db: AsyncSession, raw_id: Union[str, uuid.UUID]) -> UserEnvelope:
        """
        Raises:
            InvalidIdError: Malformed id (→ 400)
            NotFoundError: No such user (→ 404)
        """
        user_id = parse_id(raw_id, "user")
        try:
            user = await self._find_by_id(db, user_id)
        except ENotebookError:
            raise
        except Exception as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": str(user_id)})

        return UserEnvelope(
            message="User fetched successfully",
            user=UserResponse.model_validate(user),
        )

    async def update_user(
        self,
        db: AsyncSession,
        raw_id: Union[str, uuid.UUID],
        request: UserUpdateRequest,
        actor: Optional[uuid.UUID] = None,
    ) -> UserEnvelope:
        """
        Apply the provided fields to a user.

        A new password is hashed before it is stored. Moving to an email that
        belongs to another account is rejected.

        Raises:
            InvalidIdError: Malformed id (→ 400)
            ForbiddenError: `actor` is set and is not this user (→ 403)
            DuplicateEmailError: Email belongs to another user (→ 400)
            NotFoundError: No such user (→ 404)
        """
        user_id = parse_id(raw_id, "user")
        self._check_self(actor, user_id)
        try:
            user = await self._find_by_id(db, user_id)

            if request.email is not None and request.email != user.email:
                if await self._find_by_email(db, request.email) is not None:
                    raise DuplicateEmailError()
                user.email = request.email
            if request.name is not None:
                user.name = request.name
            if request.password is not None:
                user.password_hash = await hash_password(request.password)

            await db.commit()
        except ENotebookError:
            raise
        except IntegrityError:
            raise DuplicateEmailError(context={"source": "unique constraint"})
        except Exception as e:
            logger.error("Database error updating user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the user. Please try again.",
                context={"user_id": str(user_id)},
            )

        logger.info("User updated: %s", user_id)
        return UserEnvelope(
            message="User updated successfully",
            user=UserResponse.model_validate(user),
        )

    async def delete_user(
        self,
        db: AsyncSession,
        raw_id: Union[str, uuid.UUID],
        actor: Optional[uuid.UUID] = None,
    ) -> MessageResponse:
        """
        Remove a user. Their notes are left in place.

        Raises:
            InvalidIdError: Malformed id (→ 400)
            ForbiddenError: `actor` is set and is not this user (→ 403)
            NotFoundError: No such user (→ 404)
        """
        user_id = parse_id(raw_id, "user")
        self._check_self(actor, user_id)
        try:
            user = await self._find_by_id(db, user_id)
            await db.delete(user)
            await db.commit()
        except ENotebookError:
            raise
        except Exception as e:
            logger.error("Database error deleting user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the user. Please try again.",
                context={"user_id": str(user_id)},
            )

        logger.info("User deleted: %s", user_id)
        return MessageResponse(message="User deleted successfully")


# ── Singleton Instance ────────────────────────────────────────────────────
account_service = AccountService()
