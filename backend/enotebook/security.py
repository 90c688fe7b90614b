"""Password hashing helpers for the credential store."""

import bcrypt
from starlette.concurrency import run_in_threadpool

from enotebook.config import settings


def _hash_password_sync(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def _verify_password_sync(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("ascii"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


async def hash_password(password: str) -> str:
    """Salted bcrypt hash using the configured cost factor."""
    return await run_in_threadpool(_hash_password_sync, password, settings.bcrypt_rounds)


async def verify_password(password: str, hashed: str) -> bool:
    """Constant-time comparison of a plaintext password against a stored hash."""
    return await run_in_threadpool(_verify_password_sync, password, hashed)


__all__ = ["hash_password", "verify_password"]
