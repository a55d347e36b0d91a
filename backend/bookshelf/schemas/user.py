"""Pydantic schemas for user operations."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    first_name: Any = Field(default=None, json_schema_extra={"type": "string", "example": "John"})
    last_name: Any = Field(default=None, json_schema_extra={"type": "string", "example": "Doe"})
    username: Any = Field(
        default=None, json_schema_extra={"type": "string", "minLength": 3, "maxLength": 20, "example": "johndoe"}
    )
    password: Any = Field(
        default=None, json_schema_extra={"type": "string", "minLength": 8, "example": "Secret1!pass"}
    )
    email: Any = Field(
        default=None, json_schema_extra={"type": "string", "format": "email", "example": "johndoe@example.com"}
    )


class UserRead(BaseModel):
    """Public user fields. The password hash is never part of this model."""

    user_id: int
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None


class UserCreated(BaseModel):
    message: str
    data: UserRead


class CurrentUser(BaseModel):
    data: UserRead
