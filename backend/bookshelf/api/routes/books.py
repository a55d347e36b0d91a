"""Book collection endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.dependencies import get_db
from bookshelf.core.errors import NotFoundError, RequestValidationFailed, StoreUnavailableError
from bookshelf.schemas.book import BookCreated, BookDetail, BookList, BookRead, BookUpdated, BookWrite
from bookshelf.schemas.common import MessageResponse, ValidationErrorResponse
from bookshelf.services import books as book_service
from bookshelf.validation import BOOK_BODY, BOOK_ID, ValidationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])

_VALIDATION = {status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse}}
_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": MessageResponse}}
_STORE_ERROR = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse}}


def _raise_for_errors(*results: ValidationResult) -> None:
    errors = [violation for result in results for violation in result.errors]
    if errors:
        raise RequestValidationFailed(errors)


def _not_found(book_id: int) -> NotFoundError:
    return NotFoundError(f"bookid: {book_id} not found")


@router.post(
    "",
    response_model=BookCreated,
    status_code=status.HTTP_201_CREATED,
    responses={**_VALIDATION, **_STORE_ERROR},
    summary="Add a new book to the collection",
)
async def create_book(payload: BookWrite, session: AsyncSession = Depends(get_db)) -> BookCreated:
    body = BOOK_BODY.validate(payload.model_dump())
    _raise_for_errors(body)

    try:
        book = await book_service.create_book(session, body.values["title"], body.values["author"])
        await session.commit()
    except SQLAlchemyError as exc:
        raise StoreUnavailableError("Server could not add the book to the collection") from exc

    logger.info("Created book %d", book.id)
    return BookCreated(message="Book added to the collection", book=BookRead.model_validate(book))


@router.get("", response_model=BookList, responses=_STORE_ERROR, summary="Retrieve all books in the collection")
async def list_books(session: AsyncSession = Depends(get_db)) -> BookList:
    try:
        books = await book_service.list_books(session)
    except SQLAlchemyError as exc:
        raise StoreUnavailableError("Server could not read the collection") from exc
    return BookList(data=[BookRead.model_validate(book) for book in books])


@router.get(
    "/{bookid}",
    response_model=BookDetail,
    responses={**_VALIDATION, **_NOT_FOUND, **_STORE_ERROR},
    summary="Retrieve a book by its ID",
)
async def get_book(bookid: str, session: AsyncSession = Depends(get_db)) -> BookDetail:
    path = BOOK_ID.validate({"bookid": bookid})
    _raise_for_errors(path)
    book_id = int(path.values["bookid"])

    try:
        book = await book_service.get_book(session, book_id)
    except SQLAlchemyError as exc:
        raise StoreUnavailableError("Server could not get the book") from exc
    if not book:
        raise _not_found(book_id)
    return BookDetail(data=BookRead.model_validate(book))


@router.put(
    "/{bookid}",
    response_model=BookUpdated,
    responses={**_VALIDATION, **_NOT_FOUND, **_STORE_ERROR},
    summary="Update a book by its ID",
)
async def update_book(bookid: str, payload: BookWrite, session: AsyncSession = Depends(get_db)) -> BookUpdated:
    body = BOOK_BODY.validate(payload.model_dump())
    path = BOOK_ID.validate({"bookid": bookid})
    _raise_for_errors(body, path)
    book_id = int(path.values["bookid"])

    try:
        book = await book_service.update_book(session, book_id, body.values["title"], body.values["author"])
        if book:
            await session.commit()
    except SQLAlchemyError as exc:
        raise StoreUnavailableError("Server could not update the book") from exc
    if not book:
        raise _not_found(book_id)

    logger.info("Updated book %d", book.id)
    return BookUpdated(message="Book updated successfully", data=BookRead.model_validate(book))


@router.delete(
    "/{bookid}",
    response_model=MessageResponse,
    responses={**_VALIDATION, **_NOT_FOUND, **_STORE_ERROR},
    summary="Delete a book by its ID",
)
async def delete_book(bookid: str, session: AsyncSession = Depends(get_db)) -> MessageResponse:
    path = BOOK_ID.validate({"bookid": bookid})
    _raise_for_errors(path)
    book_id = int(path.values["bookid"])

    try:
        deleted = await book_service.delete_book(session, book_id)
        await session.commit()
    except SQLAlchemyError as exc:
        raise StoreUnavailableError("Server could not delete the book") from exc
    if not deleted:
        raise _not_found(book_id)

    logger.info("Deleted book %d", book_id)
    return MessageResponse(message="Book deleted successfully")
