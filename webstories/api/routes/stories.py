"""Story endpoints: browse, author, like, bookmark and download."""

from typing import Optional

from fastapi import APIRouter, Query, Response, status

from ...config import STORY_CONSTANTS
from ..dependencies import CurrentUser, Service
from ..models.requests import CreateStoryRequest, UpdateStoryRequest
from ..models.responses import (
    BookmarkedStoriesResponse,
    BookmarkToggleResponse,
    LikeResponse,
    MessageResponse,
    StoryListResponse,
    StoryResponse,
    UserProfileResponse,
)

router = APIRouter()

_NOT_FOUND = {404: {"model": MessageResponse, "description": "Story not found"}}
_UNAUTHORIZED = {401: {"model": MessageResponse, "description": "Missing or invalid token"}}


@router.get(
    "",
    response_model=StoryListResponse,
    summary="List stories",
    description="Newest stories first, optionally filtered by category, one page at a time.",
)
async def list_stories(
    service: Service,
    category: Optional[str] = Query(default=None, description="Filter by category; empty means all"),
    page: int = Query(default=STORY_CONSTANTS["default_page"], ge=1, description="1-based page number"),
    limit: int = Query(
        default=STORY_CONSTANTS["default_page_size"],
        ge=1,
        le=STORY_CONSTANTS["max_page_size"],
        description="Stories per page",
    ),
):
    """List stories with pagination and optional category filter."""
    return await service.list_stories(category=category, page=page, limit=limit)


@router.post(
    "",
    response_model=StoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a story",
    responses={400: {"model": MessageResponse}, **_UNAUTHORIZED},
)
async def create_story(request: CreateStoryRequest, service: Service, user_id: CurrentUser):
    """Create a story authored by the requester."""
    return await service.create_story(user_id, request)


@router.get(
    "/profile",
    response_model=UserProfileResponse,
    summary="Get own profile",
    responses=_UNAUTHORIZED,
)
async def get_profile(service: Service, user_id: CurrentUser):
    """The requester's user record without credentials."""
    return await service.get_profile(user_id)


@router.get(
    "/bookmarks",
    response_model=BookmarkedStoriesResponse,
    summary="List bookmarked stories",
    responses=_UNAUTHORIZED,
)
async def get_bookmarked_stories(service: Service, user_id: CurrentUser):
    """The requester's bookmarked stories with author names."""
    return await service.get_bookmarked_stories(user_id)


@router.get(
    "/{story_id}",
    response_model=StoryResponse,
    summary="Get a story",
    responses=_NOT_FOUND,
)
async def get_story(story_id: str, service: Service):
    """Get a story by ID."""
    return await service.get_story(story_id)


@router.put(
    "/{story_id}",
    response_model=StoryResponse,
    summary="Update a story",
    description="Partial update of title, slides and category. Author only.",
    responses={
        400: {"model": MessageResponse},
        403: {"model": MessageResponse, "description": "Requester is not the author"},
        **_UNAUTHORIZED,
        **_NOT_FOUND,
    },
)
async def update_story(
    story_id: str,
    request: UpdateStoryRequest,
    service: Service,
    user_id: CurrentUser,
):
    """Update a story the requester authored."""
    return await service.update_story(story_id, user_id, request)


@router.post(
    "/{story_id}/like",
    response_model=LikeResponse,
    summary="Toggle like",
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
)
async def like_story(story_id: str, service: Service, user_id: CurrentUser):
    """Like the story, or remove the requester's like if already present."""
    return await service.toggle_like(story_id, user_id)


@router.post(
    "/{story_id}/bookmark",
    response_model=BookmarkToggleResponse,
    summary="Toggle bookmark",
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
)
async def bookmark_story(story_id: str, service: Service, user_id: CurrentUser):
    """Add the story to the requester's bookmarks, or remove it."""
    return await service.toggle_bookmark(user_id, story_id)


@router.get(
    "/{story_id}/download",
    summary="Download a story",
    description="The full story document as an indented JSON attachment.",
    responses={200: {"content": {"application/json": {}}}, **_NOT_FOUND},
)
async def download_story(story_id: str, service: Service):
    """Download a story as ``<title>.json``."""
    payload = await service.render_download(story_id)
    return Response(
        content=payload.body,
        media_type=payload.content_type,
        headers={"Content-Disposition": payload.content_disposition},
    )
