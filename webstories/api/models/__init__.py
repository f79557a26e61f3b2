"""Pydantic models for API requests and responses."""

from .enums import StoryCategory
from .requests import (
    CreateStoryRequest,
    LoginRequest,
    RegisterRequest,
    Slide,
    SlideInput,
    UpdateStoryRequest,
)
from .responses import (
    AuthorSummary,
    AuthResponse,
    BookmarkedStoriesResponse,
    BookmarkToggleResponse,
    LikeResponse,
    MessageResponse,
    StoryDocument,
    StoryListResponse,
    StoryResponse,
    UserProfileResponse,
)

__all__ = [
    "StoryCategory",
    # Requests
    "Slide",
    "SlideInput",
    "CreateStoryRequest",
    "UpdateStoryRequest",
    "RegisterRequest",
    "LoginRequest",
    # Responses
    "AuthorSummary",
    "StoryResponse",
    "StoryDocument",
    "StoryListResponse",
    "LikeResponse",
    "BookmarkToggleResponse",
    "BookmarkedStoriesResponse",
    "UserProfileResponse",
    "AuthResponse",
    "MessageResponse",
]
