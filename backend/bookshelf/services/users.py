"""User service functions for registration and authentication."""
from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from bookshelf.core.security import PasswordHasher
from bookshelf.models.user import User


class DuplicateUserError(ValueError):
    """A user with the same username or email already exists."""


async def get_user_by_id(session: AsyncSession, user_id: int) -> User | None:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def find_user_by_username_or_email(session: AsyncSession, username: str, email: str) -> User | None:
    result = await session.execute(select(User).where(or_(User.username == username, User.email == email)).limit(1))
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Insert a user after a duplicate pre-check.

    The unique constraints remain the final arbiter: a concurrent
    registration that slips past the pre-check surfaces as
    :class:`DuplicateUserError` too.
    """
    if await find_user_by_username_or_email(session, username, email):
        raise DuplicateUserError("username or email already exists")

    user = User(
        username=username,
        email=email,
        password_hash=await run_in_threadpool(PasswordHasher.hash, password),
        first_name=first_name,
        last_name=last_name,
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateUserError("username or email already exists") from exc
    return user


async def authenticate_user(session: AsyncSession, username: str, password: str) -> User | None:
    user = await get_user_by_username(session, username)
    if not user:
        return None
    if not await run_in_threadpool(PasswordHasher.verify, password, user.password_hash):
        return None
    return user
