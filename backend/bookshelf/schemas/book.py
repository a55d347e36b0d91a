"""Pydantic schemas for book operations."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BookWrite(BaseModel):
    """Request body for create and update.

    Fields are loosely typed on purpose: shape and length are checked by the
    ``BOOK_BODY`` rule set so every violation is reported in one response.
    """

    title: Any = Field(default=None, json_schema_extra={"type": "string", "maxLength": 150, "example": "1984"})
    author: Any = Field(
        default=None, json_schema_extra={"type": "string", "maxLength": 150, "example": "George Orwell"}
    )


class BookRead(BaseModel):
    id: int
    title: str
    author: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookCreated(BaseModel):
    message: str
    book: BookRead


class BookList(BaseModel):
    data: list[BookRead]


class BookDetail(BaseModel):
    data: BookRead


class BookUpdated(BaseModel):
    message: str
    data: BookRead
