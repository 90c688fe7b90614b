"""
ENotebook Backend — Account Service Unit Tests
================================================

What:  Tests for AccountService (register, login, lookup, administration).
How:   Mock DB sessions returning transient User rows; no real database.

What we test:
    ✅ Registration stores a hash, never the plaintext, and returns a token
    ✅ Duplicate email (pre-check and unique-constraint race) → DuplicateEmailError
    ✅ Unknown email and wrong password give the same InvalidCredentialsError
    ✅ Malformed ids are rejected before the database is queried
    ✅ Update hashes a new password; delete of a missing user → NotFoundError
    ✅ A caller acting on someone else's account → ForbiddenError, no query
    ✅ A failed commit is reported, never swallowed
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from enotebook.exceptions import (
    DatabaseError,
    DuplicateEmailError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidIdError,
    NotFoundError,
)
from enotebook.models.user import User
from enotebook.schemas.user import LoginRequest, RegisterRequest, UserUpdateRequest
from enotebook.security import hash_password, verify_password
from enotebook.services.account_service import AccountService
from enotebook.services.token_service import token_service


def lookup_returning(*values):
    """execute() side effect: each call's scalar_one_or_none() yields the next value."""
    results = []
    for value in values:
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        results.append(result)
    return AsyncMock(side_effect=results)


async def make_user(email="a@x.com", password="secret1") -> User:
    return User(
        id=uuid.uuid4(),
        name="Alice",
        email=email,
        password_hash=await hash_password(password),
        created_at=datetime.now(timezone.utc),
    )


def stamp_created_at(session):
    """flush() side effect standing in for the column default."""
    async def _flush():
        for call in session.add.call_args_list:
            obj = call.args[0]
            if obj.created_at is None:
                obj.created_at = datetime.now(timezone.utc)
    return AsyncMock(side_effect=_flush)


class TestRegister:

    def setup_method(self):
        self.service = AccountService()
        self.request = RegisterRequest(name="Alice", email="a@x.com", password="secret1")

    @pytest.mark.asyncio
    async def test_register_success(self, mock_db_session):
        """New email → row added with a bcrypt hash and a token for its id."""
        mock_db_session.execute = lookup_returning(None)
        mock_db_session.flush = stamp_created_at(mock_db_session)

        result = await self.service.register(mock_db_session, self.request)

        mock_db_session.add.assert_called_once()
        stored = mock_db_session.add.call_args.args[0]
        assert stored.password_hash != "secret1"
        assert await verify_password("secret1", stored.password_hash)
        assert result.message == "User added successfully"
        assert token_service.verify(result.auth_token) == stored.id
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, mock_db_session):
        mock_db_session.execute = lookup_returning(await make_user())

        with pytest.raises(DuplicateEmailError) as exc_info:
            await self.service.register(mock_db_session, self.request)

        assert exc_info.value.message == "Sorry a user with this email already exists!"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_unique_constraint_race(self, mock_db_session):
        """Two registrations pass the pre-check; the loser hits the unique index."""
        mock_db_session.execute = lookup_returning(None)
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed"))
        )

        with pytest.raises(DuplicateEmailError):
            await self.service.register(mock_db_session, self.request)

    @pytest.mark.asyncio
    async def test_register_commit_failure(self, mock_db_session):
        """No token is issued for an account that was never committed."""
        mock_db_session.execute = lookup_returning(None)
        mock_db_session.flush = stamp_created_at(mock_db_session)
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("database is locked"))
        )

        with pytest.raises(DatabaseError):
            await self.service.register(mock_db_session, self.request)

    @pytest.mark.asyncio
    async def test_register_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused"))
        )

        with pytest.raises(DatabaseError):
            await self.service.register(mock_db_session, self.request)


class TestLogin:

    def setup_method(self):
        self.service = AccountService()

    @pytest.mark.asyncio
    async def test_login_success(self, mock_db_session):
        user = await make_user()
        mock_db_session.execute = lookup_returning(user)

        result = await self.service.login(
            mock_db_session, LoginRequest(email="a@x.com", password="secret1")
        )

        assert result.message == "User logged in successfully"
        assert token_service.verify(result.auth_token) == user.id

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_the_same(self, mock_db_session):
        mock_db_session.execute = lookup_returning(None, await make_user())

        with pytest.raises(InvalidCredentialsError) as unknown:
            await self.service.login(
                mock_db_session, LoginRequest(email="z@x.com", password="secret1")
            )
        with pytest.raises(InvalidCredentialsError) as wrong:
            await self.service.login(
                mock_db_session, LoginRequest(email="a@x.com", password="wrong-pass")
            )

        assert unknown.value.message == wrong.value.message == "Invalid user credentials"


class TestUserLookup:

    def setup_method(self):
        self.service = AccountService()

    @pytest.mark.asyncio
    async def test_current_user_without_hash(self, mock_db_session):
        user = await make_user()
        mock_db_session.execute = lookup_returning(user)

        result = await self.service.get_current_user(mock_db_session, user.id)

        assert result.user.id == user.id
        assert "password" not in result.user.model_dump_json()
        assert "password_hash" not in result.user.model_dump()

    @pytest.mark.asyncio
    async def test_current_user_deleted(self, mock_db_session):
        mock_db_session.execute = lookup_returning(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_current_user(mock_db_session, uuid.uuid4())
        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    async def test_get_user_malformed_id(self, mock_db_session):
        with pytest.raises(InvalidIdError) as exc_info:
            await self.service.get_user(mock_db_session, "64b7f0c2e4b0a1a2b3c4d5e6")

        assert exc_info.value.message == "Invalid user id"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_users(self, mock_db_session):
        users = [await make_user("a@x.com"), await make_user("b@x.com")]
        result = MagicMock()
        result.scalars.return_value.all.return_value = users
        mock_db_session.execute = AsyncMock(return_value=result)

        listed = await self.service.list_users(mock_db_session)

        assert [u.email for u in listed] == ["a@x.com", "b@x.com"]


class TestUserAdministration:

    def setup_method(self):
        self.service = AccountService()

    @pytest.mark.asyncio
    async def test_update_hashes_new_password(self, mock_db_session):
        user = await make_user()
        old_hash = user.password_hash
        mock_db_session.execute = lookup_returning(user)

        result = await self.service.update_user(
            mock_db_session, str(user.id), UserUpdateRequest(password="brand-new")
        )

        assert result.message == "User updated successfully"
        assert user.password_hash != old_hash
        assert user.password_hash != "brand-new"
        assert await verify_password("brand-new", user.password_hash)

    @pytest.mark.asyncio
    async def test_update_to_taken_email(self, mock_db_session):
        user = await make_user("a@x.com")
        other = await make_user("b@x.com")
        mock_db_session.execute = lookup_returning(user, other)

        with pytest.raises(DuplicateEmailError):
            await self.service.update_user(
                mock_db_session, str(user.id), UserUpdateRequest(email="b@x.com")
            )
        assert user.email == "a@x.com"

    @pytest.mark.asyncio
    async def test_update_keeps_unsent_fields(self, mock_db_session):
        user = await make_user()
        mock_db_session.execute = lookup_returning(user)

        result = await self.service.update_user(
            mock_db_session, str(user.id), UserUpdateRequest(name="Alicia")
        )

        assert result.user.name == "Alicia"
        assert result.user.email == "a@x.com"

    @pytest.mark.asyncio
    async def test_delete_user(self, mock_db_session):
        user = await make_user()
        mock_db_session.execute = lookup_returning(user)

        result = await self.service.delete_user(mock_db_session, str(user.id))

        assert result.message == "User deleted successfully"
        mock_db_session.delete.assert_awaited_once_with(user)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, mock_db_session):
        mock_db_session.execute = lookup_returning(None)

        with pytest.raises(NotFoundError):
            await self.service.delete_user(mock_db_session, str(uuid.uuid4()))
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_own_account(self, mock_db_session):
        user = await make_user()
        mock_db_session.execute = lookup_returning(user)

        result = await self.service.update_user(
            mock_db_session, str(user.id), UserUpdateRequest(name="Alicia"), actor=user.id
        )

        assert result.user.name == "Alicia"

    @pytest.mark.asyncio
    async def test_update_someone_elses_account(self, mock_db_session):
        with pytest.raises(ForbiddenError):
            await self.service.update_user(
                mock_db_session,
                str(uuid.uuid4()),
                UserUpdateRequest(password="hijacked"),
                actor=uuid.uuid4(),
            )

        mock_db_session.execute.assert_not_awaited()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_someone_elses_account(self, mock_db_session):
        with pytest.raises(ForbiddenError):
            await self.service.delete_user(
                mock_db_session, str(uuid.uuid4()), actor=uuid.uuid4()
            )

        mock_db_session.execute.assert_not_awaited()
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_id_checked_before_ownership(self, mock_db_session):
        with pytest.raises(InvalidIdError):
            await self.service.delete_user(mock_db_session, "not-an-id", actor=uuid.uuid4())

    @pytest.mark.asyncio
    async def test_update_commit_failure(self, mock_db_session):
        user = await make_user()
        mock_db_session.execute = lookup_returning(user)
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("database is locked"))
        )

        with pytest.raises(DatabaseError):
            await self.service.update_user(
                mock_db_session, str(user.id), UserUpdateRequest(name="Alicia")
            )
