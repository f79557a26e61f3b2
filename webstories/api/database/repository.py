"""Repository for story persistence using raw asyncpg SQL."""

from typing import Any, Optional

import asyncpg

from ...core.stories import LikeToggle, toggle_like
from ..models.responses import AuthorSummary, StoryDocument, StoryResponse

# Story columns joined with the author's display name
_STORY_SELECT = """
    SELECT s.id, s.title, s.slides, s.category, s.author_id,
           u.username AS author_username,
           s.likes, cardinality(s.likes) AS like_count,
           s.created_at, s.updated_at
    FROM stories s
    JOIN users u ON u.id = s.author_id
"""


class StoryRepository:
    """Repository for story persistence operations."""

    def __init__(self, conn: asyncpg.Connection):
        self.conn = conn

    async def create_story(
        self,
        story_id: str,
        title: str,
        slides: list[dict[str, Any]],
        category: str,
        author_id: str,
    ) -> StoryResponse:
        """Insert a new story with an empty like set."""
        await self.conn.execute(
            """
            INSERT INTO stories (id, title, slides, category, author_id, likes, created_at, updated_at)
            VALUES ($1, $2, $3, $4, $5, '{}', now(), now())
            """,
            story_id,
            title,
            slides,
            category,
            author_id,
        )
        return await self.get_story(story_id)

    async def get_story(self, story_id: str) -> Optional[StoryResponse]:
        """Get a story by ID with its author's name."""
        row = await self.conn.fetchrow(f"{_STORY_SELECT} WHERE s.id = $1", story_id)
        if not row:
            return None
        return self._record_to_response(row)

    async def get_story_document(self, story_id: str) -> Optional[StoryDocument]:
        """Get the stored story document (author as id)."""
        row = await self.conn.fetchrow(f"{_STORY_SELECT} WHERE s.id = $1", story_id)
        if not row:
            return None
        return self._record_to_document(row)

    async def get_author_id(self, story_id: str) -> Optional[str]:
        """Author of a story, or None if the story does not exist."""
        return await self.conn.fetchval(
            "SELECT author_id FROM stories WHERE id = $1",
            story_id,
        )

    async def story_exists(self, story_id: str) -> bool:
        """True if a story with this id exists."""
        return bool(
            await self.conn.fetchval(
                "SELECT EXISTS(SELECT 1 FROM stories WHERE id = $1)",
                story_id,
            )
        )

    async def list_stories(
        self,
        limit: int = 10,
        offset: int = 0,
        category: Optional[str] = None,
    ) -> tuple[list[StoryResponse], int]:
        """List stories newest first with pagination and optional category filter."""
        if category:
            total = await self.conn.fetchval(
                "SELECT COUNT(*) FROM stories WHERE category = $1",
                category,
            )
            rows = await self.conn.fetch(
                f"""
                {_STORY_SELECT}
                WHERE s.category = $1
                ORDER BY s.created_at DESC
                LIMIT $2 OFFSET $3
                """,
                category,
                limit,
                offset,
            )
        else:
            total = await self.conn.fetchval("SELECT COUNT(*) FROM stories")
            rows = await self.conn.fetch(
                f"""
                {_STORY_SELECT}
                ORDER BY s.created_at DESC
                LIMIT $1 OFFSET $2
                """,
                limit,
                offset,
            )

        return [self._record_to_response(r) for r in rows], total or 0

    async def get_stories_by_ids(self, story_ids: list[str]) -> list[StoryResponse]:
        """Fetch the stories for a set of ids, in store order."""
        if not story_ids:
            return []
        rows = await self.conn.fetch(
            f"{_STORY_SELECT} WHERE s.id = ANY($1::text[])",
            story_ids,
        )
        return [self._record_to_response(r) for r in rows]

    async def update_story(
        self,
        story_id: str,
        title: Optional[str] = None,
        slides: Optional[list[dict[str, Any]]] = None,
        category: Optional[str] = None,
    ) -> Optional[StoryResponse]:
        """Set the supplied fields; None leaves a column unchanged."""
        await self.conn.execute(
            """
            UPDATE stories
            SET title = COALESCE($2, title),
                slides = COALESCE($3, slides),
                category = COALESCE($4, category),
                updated_at = now()
            WHERE id = $1
            """,
            story_id,
            title,
            slides,
            category,
        )
        return await self.get_story(story_id)

    async def toggle_like(self, story_id: str, user_id: str) -> Optional[LikeToggle]:
        """Toggle a user's like under a row lock.

        Returns None if the story does not exist.
        """
        async with self.conn.transaction():
            likes = await self.conn.fetchval(
                "SELECT likes FROM stories WHERE id = $1 FOR UPDATE",
                story_id,
            )
            if likes is None:
                return None

            result = toggle_like(list(likes), user_id)
            await self.conn.execute(
                "UPDATE stories SET likes = $2, updated_at = now() WHERE id = $1",
                story_id,
                result.likes,
            )
        return result

    def _record_to_document(self, row: asyncpg.Record) -> StoryDocument:
        """Convert asyncpg Record to the stored document model."""
        return StoryDocument(author=row["author_id"], **self._common_fields(row))

    def _record_to_response(self, row: asyncpg.Record) -> StoryResponse:
        """Convert asyncpg Record to response model."""
        return StoryResponse(
            author=AuthorSummary(id=row["author_id"], username=row["author_username"]),
            **self._common_fields(row),
        )

    @staticmethod
    def _common_fields(row: asyncpg.Record) -> dict[str, Any]:
        return {
            "id": row["id"],
            "title": row["title"],
            "slides": row["slides"] or [],
            "category": row["category"],
            "likes": list(row["likes"] or []),
            "like_count": row["like_count"] or 0,
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }
