"""FastAPI dependency injection for services and repositories."""

from typing import Annotated, AsyncGenerator, Optional

import asyncpg
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .auth.tokens import user_id_from_token
from .database.repository import StoryRepository
from .database.user_repository import UserRepository
from .exceptions import UnauthorizedError
from .services.story_service import StoryService

# Security scheme for bearer token authentication; missing credentials are
# reported by get_current_user so the reply uses the API error shape
security = HTTPBearer(auto_error=False)


# Connection dependency - borrowed from the application pool
async def get_connection(request: Request) -> AsyncGenerator[asyncpg.Connection, None]:
    """Acquire a pooled connection for the duration of a request."""
    pool: Optional[asyncpg.Pool] = getattr(request.app.state, "db_pool", None)
    if pool is None:
        raise RuntimeError(
            "Database not configured. Set DATABASE_URL environment variable "
            "to a PostgreSQL connection string."
        )
    async with pool.acquire() as conn:
        yield conn


# Repositories - require a connection
def get_repository(
    conn: Annotated[asyncpg.Connection, Depends(get_connection)]
) -> StoryRepository:
    """Get a StoryRepository instance with injected connection."""
    return StoryRepository(conn)


def get_user_repository(
    conn: Annotated[asyncpg.Connection, Depends(get_connection)]
) -> UserRepository:
    """Get a UserRepository instance with injected connection."""
    return UserRepository(conn)


# Service - depends on repositories
def get_story_service(
    repo: Annotated[StoryRepository, Depends(get_repository)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
) -> StoryService:
    """Get a StoryService instance with injected repositories."""
    return StoryService(repo, users)


# Type aliases for cleaner route signatures
Users = Annotated[UserRepository, Depends(get_user_repository)]
Service = Annotated[StoryService, Depends(get_story_service)]


# Authentication dependency
async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]
) -> str:
    """Verify the bearer token and return the user id.

    Raises:
        UnauthorizedError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise UnauthorizedError("Not authorized, no token")

    user_id = user_id_from_token(credentials.credentials)
    if user_id is None:
        raise UnauthorizedError("Not authorized, token failed")
    return user_id


# Type alias for authenticated user id
CurrentUser = Annotated[str, Depends(get_current_user)]
