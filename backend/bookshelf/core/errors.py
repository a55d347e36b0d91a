"""API error types and the handlers that render them as JSON."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bookshelf.validation import Violation

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Validation errors, Please check the error message below"


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        payload: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, **self.payload}


class RequestValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: Sequence[Violation]) -> None:
        super().__init__(
            VALIDATION_MESSAGE,
            payload={"errors": [violation.to_dict() for violation in errors]},
        )
        self.errors = list(errors)


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class StoreUnavailableError(ApiError):
    """A store call failed. The cause is logged, never sent to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if isinstance(exc, StoreUnavailableError):
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    violations = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            # loc carries the decode offset, not a field name
            field = "body"
        else:
            location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path")]
            field = ".".join(location) or "body"
        violations.append(Violation(field=field, message=error.get("msg", "Invalid value")))
    return await _api_error_handler(request, RequestValidationFailed(violations))


async def _store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    wrapped = StoreUnavailableError("Server could not complete the request due to a database problem")
    wrapped.__cause__ = exc
    return await _api_error_handler(request, wrapped)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)
