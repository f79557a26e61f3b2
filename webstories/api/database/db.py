"""PostgreSQL connection management.

The schema is declared with SQLAlchemy and created once at startup through
an async engine. Request handling runs raw SQL on an asyncpg pool that the
application owns for its whole lifetime (see ``main.lifespan``).
"""

import json
import logging

import asyncpg
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ..config import DB_POOL_MAX_SIZE, DB_POOL_MIN_SIZE

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


def sqlalchemy_url(database_url: str) -> str:
    """Database URL with the asyncpg driver selected for SQLAlchemy."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    return database_url


def asyncpg_dsn(database_url: str) -> str:
    """Convert SQLAlchemy-style URL to asyncpg format."""
    return database_url.replace("+asyncpg", "")


async def init_db(database_url: str) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register on Base.metadata
    from . import models  # noqa: F401

    engine = create_async_engine(sqlalchemy_url(database_url), echo=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode JSONB columns to Python objects on every pooled connection."""
    await conn.set_type_codec(
        "jsonb",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )


async def create_pool(database_url: str) -> asyncpg.Pool:
    """Open the application connection pool."""
    pool = await asyncpg.create_pool(
        asyncpg_dsn(database_url),
        min_size=DB_POOL_MIN_SIZE,
        max_size=DB_POOL_MAX_SIZE,
        init=_init_connection,
    )
    logger.info("Database pool opened (min=%d, max=%d)", DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE)
    return pool
