"""Core story rules, independent of the API and database layers."""

from .stories import (
    DownloadPayload,
    EditForbiddenError,
    LikeToggle,
    PageWindow,
    StoryValidationError,
    authorize_edit,
    category_filter,
    page_window,
    render_download,
    toggle_bookmark,
    toggle_like,
    validate_story_input,
    validate_story_update,
)

__all__ = [
    # Errors
    "StoryValidationError",
    "EditForbiddenError",
    # Validation and authorization
    "validate_story_input",
    "validate_story_update",
    "category_filter",
    "authorize_edit",
    # Toggles
    "LikeToggle",
    "toggle_like",
    "toggle_bookmark",
    # Pagination
    "PageWindow",
    "page_window",
    # Download
    "DownloadPayload",
    "render_download",
]
