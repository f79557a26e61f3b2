"""
Configuration module for the stories backend.

Re-exports the story rule constants.
"""

from .story import CATEGORIES, STORY_CONSTANTS

__all__ = [
    "CATEGORIES",
    "STORY_CONSTANTS",
]
