"""
Story aggregate rules.

Pure functions over story and user state: input validation, edit
authorization, like/bookmark toggles, pagination arithmetic and the
download rendering. Nothing in this module touches the database or the
HTTP layer, so every rule can be exercised directly.
"""

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence
from urllib.parse import quote

from ..config import CATEGORIES, STORY_CONSTANTS

INVALID_STORY_MESSAGE = "Invalid story data"
SLIDE_COUNT_MESSAGE = (
    f"Slides must be between {STORY_CONSTANTS['min_slides']} "
    f"and {STORY_CONSTANTS['max_slides']}"
)
INVALID_PAGE_MESSAGE = "Invalid pagination parameters"
INVALID_CATEGORY_MESSAGE = "Invalid category"

DOWNLOAD_CONTENT_TYPE = "application/json"

# Characters that break a path or a Content-Disposition header value
_UNSAFE_FILENAME_CHARS = re.compile(r'[\x00-\x1f\x7f/\\";]')


# =============================================================================
# Errors
# =============================================================================


class StoryValidationError(ValueError):
    """Story input breaks a story invariant."""

    def __init__(self, message: str = INVALID_STORY_MESSAGE):
        self.message = message
        super().__init__(message)


class EditForbiddenError(PermissionError):
    """Requester is not the author of the story."""


# =============================================================================
# Validation
# =============================================================================


def slide_count_ok(slides: Sequence[Any]) -> bool:
    """True when the slide list length is within the allowed bounds."""
    return STORY_CONSTANTS["min_slides"] <= len(slides) <= STORY_CONSTANTS["max_slides"]


def _title_ok(title: Optional[str]) -> bool:
    return bool(title) and bool(title.strip())


def _slide_ok(slide: Mapping[str, Any]) -> bool:
    # video is optional, image and text must be present
    return bool(slide.get("image")) and bool(slide.get("text"))


def validate_story_input(
    title: Optional[str],
    slides: Optional[Sequence[Mapping[str, Any]]],
    category: Optional[str],
) -> None:
    """Validate a full story payload for creation.

    Raises:
        StoryValidationError: title missing/blank, slides missing or out of
            bounds, a slide without image/text, or category missing/unknown.
    """
    if not _title_ok(title) or slides is None or not category:
        raise StoryValidationError()
    if not slide_count_ok(slides):
        raise StoryValidationError()
    if not all(_slide_ok(slide) for slide in slides):
        raise StoryValidationError()
    if category not in CATEGORIES:
        raise StoryValidationError()


def validate_story_update(
    title: Optional[str] = None,
    slides: Optional[Sequence[Mapping[str, Any]]] = None,
    category: Optional[str] = None,
) -> None:
    """Validate a partial update. ``None`` means the field is left unchanged.

    The slide bound applies to the replacement list on its own; the length
    of the stored list plays no part.
    """
    if title is not None and not _title_ok(title):
        raise StoryValidationError()
    if slides is not None:
        if not slide_count_ok(slides):
            raise StoryValidationError(SLIDE_COUNT_MESSAGE)
        if not all(_slide_ok(slide) for slide in slides):
            raise StoryValidationError()
    if category is not None and category not in CATEGORIES:
        raise StoryValidationError()


def category_filter(category: Optional[str]) -> Optional[str]:
    """Normalize the listing filter: empty means all categories.

    Raises:
        StoryValidationError: a non-empty category that is not known.
    """
    if not category:
        return None
    if category not in CATEGORIES:
        raise StoryValidationError(INVALID_CATEGORY_MESSAGE)
    return category


# =============================================================================
# Authorization
# =============================================================================


def authorize_edit(author_id: str, requester_id: str) -> None:
    """Only the author may change title, slides or category."""
    if str(author_id) != str(requester_id):
        raise EditForbiddenError("Not authorized to edit this story")


# =============================================================================
# Toggles
# =============================================================================


def toggle_membership(members: Sequence[str], item: str) -> tuple[list[str], bool]:
    """Flip membership of ``item`` in an id set.

    Returns the new member list (no duplicates, original order kept) and
    whether ``item`` is a member afterwards.
    """
    unique = list(dict.fromkeys(members))
    if item in unique:
        unique.remove(item)
        return unique, False
    unique.append(item)
    return unique, True


@dataclass(frozen=True)
class LikeToggle:
    """Result of toggling a user's like on a story."""

    likes: list[str]
    liked: bool

    @property
    def like_count(self) -> int:
        return len(self.likes)


def toggle_like(likes: Sequence[str], user_id: str) -> LikeToggle:
    """Like the story if ``user_id`` has not liked it yet, otherwise unlike it."""
    new_likes, liked = toggle_membership(likes, user_id)
    return LikeToggle(likes=new_likes, liked=liked)


def toggle_bookmark(bookmarks: Sequence[str], story_id: str) -> list[str]:
    """Add ``story_id`` to the bookmark set, or remove it if already present."""
    new_bookmarks, _ = toggle_membership(bookmarks, story_id)
    return new_bookmarks


# =============================================================================
# Pagination
# =============================================================================


@dataclass(frozen=True)
class PageWindow:
    """A 1-based page of ``limit`` items."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


def page_window(
    page: int = STORY_CONSTANTS["default_page"],
    limit: int = STORY_CONSTANTS["default_page_size"],
) -> PageWindow:
    """Build a page window, rejecting non-integer or out-of-range values."""
    for value in (page, limit):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise StoryValidationError(INVALID_PAGE_MESSAGE)
    if limit > STORY_CONSTANTS["max_page_size"]:
        raise StoryValidationError(INVALID_PAGE_MESSAGE)
    return PageWindow(page=page, limit=limit)


# =============================================================================
# Download
# =============================================================================


@dataclass(frozen=True)
class DownloadPayload:
    """A story rendered as a JSON attachment."""

    filename: str
    content_type: str
    body: bytes

    @property
    def content_disposition(self) -> str:
        return content_disposition(self.filename)


def download_filename(title: str) -> str:
    """``<title>.json`` with path- and header-hostile characters replaced."""
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', title)}.json"


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and an RFC 5987 UTF-8 name."""
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return f"attachment; filename={ascii_name}; filename*=UTF-8''{quote(filename, safe='')}"


def render_download(document: Mapping[str, Any]) -> DownloadPayload:
    """Serialize a full story document as indented JSON."""
    body = json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")
    return DownloadPayload(
        filename=download_filename(str(document.get("title", "story"))),
        content_type=DOWNLOAD_CONTENT_TYPE,
        body=body,
    )
