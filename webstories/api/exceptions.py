"""Exception types and handlers for the stories API.

Every error reply has the shape ``{"message": str}``; validation replies add
an ``errors`` list.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.stories import INVALID_STORY_MESSAGE
from .logging import story_logger


class APIError(Exception):
    """Base API error."""

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidStoryError(APIError):
    """Story payload rejected by validation."""

    def __init__(self, message: str = INVALID_STORY_MESSAGE):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class UnauthorizedError(APIError):
    """Authentication required or failed."""

    def __init__(self, message: str = "Not authorized, token failed"):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(APIError):
    """Authenticated, but not allowed to perform the action."""

    def __init__(self, message: str = "Not authorized to edit this story"):
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN)


class NotFoundError(APIError):
    """Resource not found."""

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found", status_code=status.HTTP_404_NOT_FOUND)


class ConflictError(APIError):
    """Resource conflict."""

    def __init__(self, message: str):
        super().__init__(message, status_code=status.HTTP_409_CONFLICT)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed bodies and query parameters."""
    errors: list[Any] = jsonable_encoder(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": errors},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle framework HTTP errors (unknown routes, wrong methods)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions and reply without internal detail."""
    story_logger.request_failed(request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
