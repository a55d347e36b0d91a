"""Registration and login endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.dependencies import get_current_user, get_db, get_token_signer
from bookshelf.core.errors import (
    AuthenticationError,
    ConflictError,
    RequestValidationFailed,
    StoreUnavailableError,
)
from bookshelf.core.security import TokenSigner
from bookshelf.models.user import User
from bookshelf.schemas.auth import LoginRequest, LoginResponse
from bookshelf.schemas.common import MessageResponse, ValidationErrorResponse
from bookshelf.schemas.user import CurrentUser, UserCreate, UserCreated, UserRead
from bookshelf.services.users import DuplicateUserError, authenticate_user, create_user
from bookshelf.validation import LOGIN, REGISTER

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

DUPLICATE_USER_MESSAGE = "username or email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


def _user_to_read(user: User) -> UserRead:
    return UserRead(
        user_id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )


@router.post(
    "/register",
    response_model=UserCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_409_CONFLICT: {"model": MessageResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
    summary="Register a new user",
)
async def register_user(payload: UserCreate, session: AsyncSession = Depends(get_db)) -> UserCreated:
    result = REGISTER.validate(payload.model_dump())
    if not result.is_valid:
        raise RequestValidationFailed(result.errors)

    values = result.values
    try:
        user = await create_user(
            session,
            username=values["username"],
            email=values["email"],
            password=values["password"],
            first_name=values["first_name"],
            last_name=values["last_name"],
        )
        await session.commit()
    except (DuplicateUserError, IntegrityError) as exc:
        logger.info("Registration rejected for duplicate username or email")
        raise ConflictError(DUPLICATE_USER_MESSAGE) from exc
    except SQLAlchemyError as exc:
        raise StoreUnavailableError("Server could not register the user") from exc

    logger.info("Registered user %d (%s)", user.id, user.username)
    return UserCreated(message="User created successfully", data=_user_to_read(user))


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": MessageResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
    summary="Log in and receive a bearer token",
)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db),
    signer: TokenSigner = Depends(get_token_signer),
) -> LoginResponse:
    result = LOGIN.validate(payload.model_dump())
    if not result.is_valid:
        raise RequestValidationFailed(result.errors)

    username = result.values["username"]
    try:
        user = await authenticate_user(session, username, result.values["password"])
    except SQLAlchemyError as exc:
        raise StoreUnavailableError("Server could not log the user in") from exc
    if not user:
        # same answer for unknown user and wrong password
        logger.info("Failed login for %r", username)
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    token = signer.issue({"user_id": user.id, "first_name": user.first_name, "last_name": user.last_name})
    logger.info("User %d logged in", user.id)
    return LoginResponse(message="Login successful", token=token, user=_user_to_read(user))


@router.get(
    "/me",
    response_model=CurrentUser,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": MessageResponse}},
    summary="Return the user the bearer token belongs to",
)
async def get_current_user_info(current_user: User = Depends(get_current_user)) -> CurrentUser:
    return CurrentUser(data=_user_to_read(current_user))
