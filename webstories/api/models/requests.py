"""Pydantic models for API requests.

Story payload fields are optional at the schema level: creation rules
(slide bounds, image and text per slide, known category) are enforced by
the story service so that they surface as ``Invalid story data`` rather
than schema errors.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Slide(BaseModel):
    """One stored slide of a story."""

    image: str = Field(..., description="Image URL", examples=["https://example.com/a.jpg"])
    video: Optional[str] = Field(default=None, description="Optional video URL")
    text: str = Field(..., description="Slide caption")


class SlideInput(BaseModel):
    """A slide as submitted; image and text are checked with the story rules."""

    image: Optional[str] = None
    video: Optional[str] = None
    text: Optional[str] = None


class CreateStoryRequest(BaseModel):
    """Request body for creating a story."""

    title: Optional[str] = Field(default=None, examples=["My Trip"])
    slides: Optional[list[SlideInput]] = Field(default=None, description="Between 3 and 6 slides")
    category: Optional[str] = Field(default=None, examples=["travel"])


class UpdateStoryRequest(BaseModel):
    """Request body for updating a story.

    All fields are optional; omitted or null fields remain unchanged.
    """

    title: Optional[str] = None
    slides: Optional[list[SlideInput]] = None
    category: Optional[str] = None

    def changed_fields(self) -> list[str]:
        """Names of the fields this update sets."""
        return [name for name in ("title", "slides", "category") if getattr(self, name) is not None]


class RegisterRequest(BaseModel):
    """Request body for creating an account."""

    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    """Request body for logging in."""

    username: str
    password: str
