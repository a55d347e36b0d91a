"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.config import Settings
from bookshelf.core.errors import AuthenticationError
from bookshelf.core.security import InvalidTokenError, TokenSigner
from bookshelf.models.user import User
from bookshelf.services.users import get_user_by_id

_bearer_scheme = HTTPBearer(auto_error=False)
_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.database.session() as session:
        yield session


def get_token_signer(settings: Settings = Depends(get_app_settings)) -> TokenSigner:
    return TokenSigner(settings.secret_key, settings.access_token_expire_seconds)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    signer: TokenSigner = Depends(get_token_signer),
    session: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationError("Not authenticated", headers=_BEARER_CHALLENGE)

    try:
        claims = signer.verify(credentials.credentials)
    except InvalidTokenError as exc:
        raise AuthenticationError("Invalid or expired token", headers=_BEARER_CHALLENGE) from exc

    user_id = claims.get("user_id")
    if not isinstance(user_id, int):
        raise AuthenticationError("Invalid or expired token", headers=_BEARER_CHALLENGE)

    user = await get_user_by_id(session, user_id)
    if not user:
        raise AuthenticationError("User not found", headers=_BEARER_CHALLENGE)

    return user
