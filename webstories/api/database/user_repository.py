"""Repository for user records and bookmark sets."""

from typing import Optional

import asyncpg

from ...core.stories import toggle_bookmark
from ..models.responses import UserProfileResponse


class UserRepository:
    """Repository for user persistence operations."""

    def __init__(self, conn: asyncpg.Connection):
        self.conn = conn

    async def create_user(self, user_id: str, username: str, password_hash: str) -> UserProfileResponse:
        """Insert a new user.

        Raises:
            asyncpg.UniqueViolationError: if the username is taken
        """
        row = await self.conn.fetchrow(
            """
            INSERT INTO users (id, username, password_hash, bookmarks, created_at, updated_at)
            VALUES ($1, $2, $3, '{}', now(), now())
            RETURNING id, username, bookmarks, created_at, updated_at
            """,
            user_id,
            username,
            password_hash,
        )
        return self._record_to_profile(row)

    async def get_credentials(self, username: str) -> Optional[asyncpg.Record]:
        """Id and password hash for a username, used by login only."""
        return await self.conn.fetchrow(
            "SELECT id, username, password_hash FROM users WHERE username = $1",
            username,
        )

    async def get_profile(self, user_id: str) -> Optional[UserProfileResponse]:
        """Get a user without credential fields."""
        row = await self.conn.fetchrow(
            "SELECT id, username, bookmarks, created_at, updated_at FROM users WHERE id = $1",
            user_id,
        )
        if not row:
            return None
        return self._record_to_profile(row)

    async def get_bookmarks(self, user_id: str) -> Optional[list[str]]:
        """Bookmarked story ids, or None if the user does not exist."""
        bookmarks = await self.conn.fetchval(
            "SELECT bookmarks FROM users WHERE id = $1",
            user_id,
        )
        if bookmarks is None:
            return None
        return list(bookmarks)

    async def toggle_bookmark(self, user_id: str, story_id: str) -> Optional[list[str]]:
        """Toggle a story in the user's bookmark set under a row lock.

        Returns the new bookmark list, or None if the user does not exist.
        """
        async with self.conn.transaction():
            bookmarks = await self.conn.fetchval(
                "SELECT bookmarks FROM users WHERE id = $1 FOR UPDATE",
                user_id,
            )
            if bookmarks is None:
                return None

            new_bookmarks = toggle_bookmark(list(bookmarks), story_id)
            await self.conn.execute(
                "UPDATE users SET bookmarks = $2, updated_at = now() WHERE id = $1",
                user_id,
                new_bookmarks,
            )
        return new_bookmarks

    @staticmethod
    def _record_to_profile(row: asyncpg.Record) -> UserProfileResponse:
        return UserProfileResponse(
            id=row["id"],
            username=row["username"],
            bookmarks=list(row["bookmarks"] or []),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
