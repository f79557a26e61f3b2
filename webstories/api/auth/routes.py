"""Authentication routes: register and login with username and password."""

import uuid

import asyncpg
from fastapi import APIRouter, status

from ..dependencies import Users
from ..exceptions import ConflictError, UnauthorizedError
from ..models.requests import LoginRequest, RegisterRequest
from ..models.responses import AuthResponse, MessageResponse
from .passwords import hash_password, verify_password
from .tokens import create_access_token

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": MessageResponse, "description": "Username taken"}},
)
async def register(request: RegisterRequest, users: Users) -> AuthResponse:
    """Create an account and receive an access token."""
    user_id = str(uuid.uuid4())
    try:
        profile = await users.create_user(user_id, request.username, hash_password(request.password))
    except asyncpg.UniqueViolationError as e:
        raise ConflictError("Username already taken") from e

    return AuthResponse(
        id=profile.id,
        username=profile.username,
        token=create_access_token(profile.id),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": MessageResponse, "description": "Bad credentials"}},
)
async def login(request: LoginRequest, users: Users) -> AuthResponse:
    """Authenticate and receive an access token.

    The token should be included in the Authorization header as
    ``Bearer <token>`` for authenticated story routes.
    """
    record = await users.get_credentials(request.username)
    if record is None or not verify_password(request.password, record["password_hash"]):
        raise UnauthorizedError("Invalid username or password")

    return AuthResponse(
        id=record["id"],
        username=record["username"],
        token=create_access_token(record["id"]),
    )
