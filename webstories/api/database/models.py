"""SQLAlchemy ORM models for PostgreSQL."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, func, text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


class User(Base):
    """User model - story author and bookmark owner."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    bookmarks: Mapped[list[str]] = mapped_column(
        ARRAY(String(36)), nullable=False, server_default=text("'{}'")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


class Story(Base):
    """Story model - a titled list of 3 to 6 slides.

    The like count is not stored; it is ``cardinality(likes)`` at read time.
    """

    __tablename__ = "stories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slides: Mapped[list[dict]] = mapped_column(JSONB, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    likes: Mapped[list[str]] = mapped_column(
        ARRAY(String(36)), nullable=False, server_default=text("'{}'")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_stories_created_at", "created_at"),
        Index("idx_stories_category_created_at", "category", "created_at"),
        Index("idx_stories_author_id", "author_id"),
    )
