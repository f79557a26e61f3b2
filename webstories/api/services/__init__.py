"""Services for story operations."""

from .story_service import StoryService

__all__ = ["StoryService"]
