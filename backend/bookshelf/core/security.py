"""Security helpers for password hashing and access-token signing."""
from __future__ import annotations

import time
from typing import Any

from itsdangerous import BadSignature, URLSafeTimedSerializer
from passlib.context import CryptContext

BCRYPT_ROUNDS = 10

_password_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


class InvalidTokenError(ValueError):
    """Raised when an access token is forged, malformed or expired."""


class PasswordHasher:
    """Hash and verify user passwords using salted bcrypt."""

    @staticmethod
    def hash(password: str) -> str:
        return _password_context.hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        try:
            return _password_context.verify(password, hashed)
        except ValueError:
            # unrecognised or corrupt hash in the store
            return False


class TokenSigner:
    """Issue and verify signed, time-limited bearer tokens.

    Tokens carry their claims in the clear (signed, not encrypted) together
    with ``iat`` and ``exp`` in epoch seconds. There is no server-side
    session: a token is valid until it expires.
    """

    def __init__(self, secret_key: str, expires_in: int, salt: str = "bookshelf-access-token") -> None:
        self.expires_in = expires_in
        self._serializer = URLSafeTimedSerializer(secret_key, salt=salt)

    def issue(self, claims: dict[str, Any]) -> str:
        issued_at = int(time.time())
        payload = {**claims, "iat": issued_at, "exp": issued_at + self.expires_in}
        return self._serializer.dumps(payload)

    def verify(self, token: str) -> dict[str, Any]:
        try:
            payload = self._serializer.loads(token, max_age=self.expires_in)
        except BadSignature as exc:
            raise InvalidTokenError("Invalid or expired access token") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("exp"), int):
            raise InvalidTokenError("Malformed access token")
        if payload["exp"] <= int(time.time()):
            raise InvalidTokenError("Invalid or expired access token")
        return payload
