"""Story service: validation, authorization and toggles around the repositories."""

import uuid
from typing import Optional

from ...core.stories import (
    DownloadPayload,
    EditForbiddenError,
    StoryValidationError,
    authorize_edit,
    category_filter,
    page_window,
    render_download,
    validate_story_input,
    validate_story_update,
)
from ..database.repository import StoryRepository
from ..database.user_repository import UserRepository
from ..exceptions import ForbiddenError, InvalidStoryError, NotFoundError
from ..logging import story_logger
from ..models.requests import CreateStoryRequest, UpdateStoryRequest
from ..models.responses import (
    BookmarkedStoriesResponse,
    BookmarkToggleResponse,
    LikeResponse,
    StoryListResponse,
    StoryResponse,
    UserProfileResponse,
)


def _slides_payload(slides) -> Optional[list[dict]]:
    if slides is None:
        return None
    return [slide.model_dump(exclude_none=True) for slide in slides]


def _category_value(category) -> Optional[str]:
    if category is None:
        return None
    return getattr(category, "value", category)


class StoryService:
    """Service for story operations on behalf of a requester."""

    def __init__(self, repo: StoryRepository, users: UserRepository):
        self.repo = repo
        self.users = users

    async def list_stories(
        self,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> StoryListResponse:
        """One page of stories, newest first, optionally filtered by category."""
        try:
            window = page_window(page, limit)
            category = category_filter(_category_value(category))
        except StoryValidationError as e:
            raise InvalidStoryError(e.message) from e

        stories, total = await self.repo.list_stories(
            limit=window.limit,
            offset=window.offset,
            category=category,
        )
        return StoryListResponse(
            stories=stories,
            total=total,
            total_pages=window.total_pages(total),
            current_page=window.page,
        )

    async def get_story(self, story_id: str) -> StoryResponse:
        story = await self.repo.get_story(story_id)
        if story is None:
            raise NotFoundError("Story")
        return story

    async def create_story(self, author_id: str, request: CreateStoryRequest) -> StoryResponse:
        """Validate and store a new story authored by the requester."""
        slides = _slides_payload(request.slides)
        category = _category_value(request.category)
        try:
            validate_story_input(request.title, slides, category)
        except StoryValidationError as e:
            raise InvalidStoryError(e.message) from e

        story_id = str(uuid.uuid4())
        story = await self.repo.create_story(
            story_id=story_id,
            title=request.title,
            slides=slides,
            category=category,
            author_id=author_id,
        )
        story_logger.story_created(story_id, author_id)
        return story

    async def update_story(
        self,
        story_id: str,
        requester_id: str,
        request: UpdateStoryRequest,
    ) -> StoryResponse:
        """Apply a partial update. Only the author may edit.

        The author check runs before payload validation, so a non-author is
        refused whatever the payload.
        """
        author_id = await self.repo.get_author_id(story_id)
        if author_id is None:
            raise NotFoundError("Story")

        try:
            authorize_edit(author_id, requester_id)
        except EditForbiddenError as e:
            story_logger.edit_forbidden(story_id, requester_id)
            raise ForbiddenError(str(e)) from e

        slides = _slides_payload(request.slides)
        category = _category_value(request.category)
        try:
            validate_story_update(request.title, slides, category)
        except StoryValidationError as e:
            raise InvalidStoryError(e.message) from e

        story = await self.repo.update_story(
            story_id,
            title=request.title,
            slides=slides,
            category=category,
        )
        if story is None:
            raise NotFoundError("Story")
        story_logger.story_updated(story_id, requester_id, request.changed_fields())
        return story

    async def toggle_like(self, story_id: str, user_id: str) -> LikeResponse:
        result = await self.repo.toggle_like(story_id, user_id)
        if result is None:
            raise NotFoundError("Story")
        story_logger.like_toggled(story_id, user_id, result.liked)
        return LikeResponse(likes=result.like_count, like_count=result.like_count, liked=result.liked)

    async def toggle_bookmark(self, user_id: str, story_id: str) -> BookmarkToggleResponse:
        """Toggle a story in the requester's own bookmark set."""
        if not await self.repo.story_exists(story_id):
            raise NotFoundError("Story")

        bookmarks = await self.users.toggle_bookmark(user_id, story_id)
        if bookmarks is None:
            raise NotFoundError("User")
        story_logger.bookmark_toggled(story_id, user_id, story_id in bookmarks)
        return BookmarkToggleResponse(bookmarks=bookmarks)

    async def get_bookmarked_stories(self, user_id: str) -> BookmarkedStoriesResponse:
        bookmark_ids = await self.users.get_bookmarks(user_id)
        if bookmark_ids is None:
            raise NotFoundError("User")
        stories = await self.repo.get_stories_by_ids(bookmark_ids)
        return BookmarkedStoriesResponse(bookmarks=stories)

    async def get_profile(self, user_id: str) -> UserProfileResponse:
        profile = await self.users.get_profile(user_id)
        if profile is None:
            raise NotFoundError("User")
        return profile

    async def render_download(self, story_id: str) -> DownloadPayload:
        """The full stored story as an indented JSON attachment."""
        document = await self.repo.get_story_document(story_id)
        if document is None:
            raise NotFoundError("Story")
        return render_download(document.model_dump(mode="json", by_alias=True, exclude_none=True))
