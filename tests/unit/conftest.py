"""Pytest fixtures for API tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from webstories.api import config
from webstories.api.auth.tokens import create_access_token
from webstories.api.database.repository import StoryRepository
from webstories.api.database.user_repository import UserRepository
from webstories.api.dependencies import get_repository, get_story_service, get_user_repository
from webstories.api.main import app
from webstories.api.models.enums import StoryCategory
from webstories.api.models.requests import Slide
from webstories.api.models.responses import AuthorSummary, StoryResponse
from webstories.api.services.story_service import StoryService

AUTHOR_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"
STORY_ID = "33333333-3333-3333-3333-333333333333"


def slides_payload(count: int) -> list[dict]:
    """Slide dicts as a client would send them."""
    return [
        {"image": f"https://img.example.com/{i}.jpg", "text": f"Slide {i}"}
        for i in range(1, count + 1)
    ]


@pytest.fixture
def make_story():
    """Factory for StoryResponse objects."""

    def _make_story(
        story_id: str = STORY_ID,
        title: str = "My Trip",
        author_id: str = AUTHOR_ID,
        category: StoryCategory = StoryCategory.TRAVEL,
        slide_count: int = 4,
        likes: list[str] | None = None,
    ) -> StoryResponse:
        likes = likes or []
        now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        return StoryResponse(
            id=story_id,
            title=title,
            slides=[Slide(**s) for s in slides_payload(slide_count)],
            category=category,
            author=AuthorSummary(id=author_id, username="alice"),
            likes=likes,
            like_count=len(likes),
            created_at=now,
            updated_at=now,
        )

    return _make_story


@pytest.fixture(autouse=True)
def no_database(monkeypatch):
    """Keep the application lifespan away from PostgreSQL."""
    monkeypatch.setattr(config, "DATABASE_URL", "")


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user id."""

    def _auth_headers(user_id: str = AUTHOR_ID) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _auth_headers


@pytest.fixture
def mock_repository():
    """Create a mock story repository for unit tests."""
    return AsyncMock(spec=StoryRepository)


@pytest.fixture
def mock_users():
    """Create a mock user repository for unit tests."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_service():
    """Create a mock service for unit tests."""
    return AsyncMock(spec=StoryService)


@pytest.fixture
def client_with_mocks(mock_repository, mock_users, mock_service):
    """TestClient with the story service replaced by a mock."""
    app.dependency_overrides[get_repository] = lambda: mock_repository
    app.dependency_overrides[get_user_repository] = lambda: mock_users
    app.dependency_overrides[get_story_service] = lambda: mock_service

    with TestClient(app) as client:
        yield client, mock_service

    app.dependency_overrides.clear()


@pytest.fixture
def client_with_repos(mock_repository, mock_users):
    """TestClient with the real service on top of mocked repositories."""
    app.dependency_overrides[get_repository] = lambda: mock_repository
    app.dependency_overrides[get_user_repository] = lambda: mock_users

    with TestClient(app) as client:
        yield client, mock_repository, mock_users

    app.dependency_overrides.clear()


@pytest.fixture
def mock_connection():
    """Create a mock asyncpg connection with a usable transaction()."""
    conn = MagicMock()
    conn.execute = AsyncMock()
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetchval = AsyncMock(return_value=None)

    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=None)
    transaction.__aexit__ = AsyncMock(return_value=False)
    conn.transaction = MagicMock(return_value=transaction)
    return conn


@pytest.fixture
def make_slides():
    """Factory for request slide payloads."""
    return slides_payload
