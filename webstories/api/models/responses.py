"""Pydantic models for API responses.

Python attributes are snake_case; the JSON wire names (``likeCount``,
``createdAt`` ...) are field aliases, which FastAPI uses when serializing
``response_model`` values.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import StoryCategory
from .requests import Slide


class AuthorSummary(BaseModel):
    """Author reference enriched with the display name."""

    id: str
    username: str


class StoryBase(BaseModel):
    """Fields shared by every story representation."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    slides: list[Slide]
    category: StoryCategory
    likes: list[str] = Field(default_factory=list)
    like_count: int = Field(default=0, alias="likeCount")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class StoryResponse(StoryBase):
    """A story with its author's display name."""

    author: AuthorSummary


class StoryDocument(StoryBase):
    """The stored story document, author as a plain id (download body)."""

    author: str


class StoryListResponse(BaseModel):
    """Paginated list of stories."""

    model_config = ConfigDict(populate_by_name=True)

    stories: list[StoryResponse]
    total: int
    total_pages: int = Field(alias="totalPages")
    current_page: int = Field(alias="currentPage")


class LikeResponse(BaseModel):
    """Result of a like toggle."""

    model_config = ConfigDict(populate_by_name=True)

    likes: int
    like_count: int = Field(alias="likeCount")
    liked: bool


class BookmarkToggleResponse(BaseModel):
    """The requester's bookmark set after a toggle."""

    bookmarks: list[str]


class BookmarkedStoriesResponse(BaseModel):
    """The requester's bookmarked stories."""

    bookmarks: list[StoryResponse]


class UserProfileResponse(BaseModel):
    """A user record without credentials."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    bookmarks: list[str] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class AuthResponse(BaseModel):
    """Issued credentials after register or login."""

    id: str
    username: str
    token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    """Error reply body."""

    message: str
