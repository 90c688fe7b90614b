"""
ENotebook Backend — Token Service
===================================

What:  Issues and verifies the signed identity token carried in the auth header.
How:   PyJWT, HMAC-signed with the server secret (HS256 by default).
Who:   AccountService issues tokens; the auth guard verifies them.

Token payload:
    {"user": {"id": "<user uuid>"}, "iat": <issued-at>}

    No `exp` claim unless TOKEN_EXPIRE_MINUTES is set: tokens are stateless
    and stay valid until the secret is rotated.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from enotebook.config import settings
from enotebook.exceptions import ConfigurationError, InvalidTokenError


class TokenService:
    """
    Stateless signer/verifier for identity tokens.

    Constructor arguments override settings; when omitted, the current
    settings values are read on every call.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_minutes: Optional[int] = None,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @property
    def secret(self) -> str:
        secret = self._secret if self._secret is not None else settings.jwt_secret
        if not secret:
            raise ConfigurationError(
                message="Server is misconfigured",
                context={"missing": "JWT_SECRET"},
            )
        return secret

    @property
    def algorithm(self) -> str:
        return self._algorithm or settings.jwt_algorithm

    @property
    def expire_minutes(self) -> Optional[int]:
        if self._expire_minutes is not None:
            return self._expire_minutes
        return settings.token_expire_minutes

    def issue(self, user_id: uuid.UUID) -> str:
        """
        Sign a token for the given user id.

        Raises:
            ConfigurationError: No signing secret is configured.
        """
        now = datetime.now(timezone.utc)
        payload = {"user": {"id": str(user_id)}, "iat": now}
        if self.expire_minutes:
            payload["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        """
        Return the user id a token was issued for.

        Raises:
            InvalidTokenError: Bad signature, malformed token or payload,
                or an expired token when expiry is configured.
            ConfigurationError: No signing secret is configured.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError(reason="token expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(reason=type(e).__name__)

        user = payload.get("user")
        raw_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(raw_id, str):
            raise InvalidTokenError(reason="payload has no user id")
        try:
            return uuid.UUID(raw_id)
        except ValueError:
            raise InvalidTokenError(reason="user id is not a UUID")


token_service = TokenService()
