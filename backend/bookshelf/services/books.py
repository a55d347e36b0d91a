"""Service layer for book persistence."""
from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.db.types import utcnow
from bookshelf.models.book import Book


async def list_books(session: AsyncSession) -> list[Book]:
    result = await session.execute(select(Book).order_by(Book.id))
    return list(result.scalars().all())


async def get_book(session: AsyncSession, book_id: int) -> Book | None:
    result = await session.execute(select(Book).where(Book.id == book_id))
    return result.scalar_one_or_none()


async def create_book(session: AsyncSession, title: str, author: str, now: datetime | None = None) -> Book:
    stamp = now or utcnow()
    book = Book(title=title, author=author, created_at=stamp, updated_at=stamp)
    session.add(book)
    await session.flush()
    return book


def _next_update_stamp(previous: datetime, now: datetime) -> datetime:
    # updated_at must strictly advance even if the clock did not
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


async def update_book(
    session: AsyncSession, book_id: int, title: str, author: str, now: datetime | None = None
) -> Book | None:
    book = await get_book(session, book_id)
    if not book:
        return None
    book.title = title
    book.author = author
    book.updated_at = _next_update_stamp(book.updated_at, now or utcnow())
    await session.flush()
    return book


async def delete_book(session: AsyncSession, book_id: int) -> bool:
    result = await session.execute(delete(Book).where(Book.id == book_id))
    return result.rowcount > 0
