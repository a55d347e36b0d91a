"""Authentication-related schemas."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .user import UserRead


class LoginRequest(BaseModel):
    username: Any = Field(default=None, json_schema_extra={"type": "string", "example": "johndoe"})
    password: Any = Field(default=None, json_schema_extra={"type": "string", "example": "Secret1!pass"})


class LoginResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserRead
