"""Database module for story persistence."""

from .db import Base, create_pool, init_db
from .models import Story, User
from .repository import StoryRepository
from .user_repository import UserRepository

__all__ = [
    # Connection management
    "init_db",
    "create_pool",
    "Base",
    # Models
    "Story",
    "User",
    # Repositories
    "StoryRepository",
    "UserRepository",
]
