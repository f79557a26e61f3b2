"""FastAPI application for the stories backend."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from . import config
from .auth.routes import router as auth_router
from .exceptions import register_exception_handlers
from .routes import stories

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - open the store before serving, close it after."""
    app.state.db_pool = None

    # Startup: fail fast if the database is configured but unreachable
    if config.DATABASE_URL:
        from .database.db import create_pool, init_db

        try:
            await init_db(config.DATABASE_URL)
            app.state.db_pool = await create_pool(config.DATABASE_URL)
        except Exception:
            logger.exception("Database connection failed")
            raise
        logger.info("Database initialized")
    else:
        logger.warning("DATABASE_URL not set - database not initialized")

    yield

    # Shutdown: release pooled connections
    if app.state.db_pool is not None:
        await app.state.db_pool.close()
        app.state.db_pool = None
        logger.info("Database pool closed")


app = FastAPI(
    title="Stories API",
    description="""
Share multi-slide stories (image, optional video, caption) by category.

## Features
- **Browse**: newest-first listing, category filter, page/limit pagination
- **Author**: create stories of 3 to 6 slides and edit your own
- **Engage**: toggle likes and bookmarks, list your bookmarks
- **Download**: any story as a JSON attachment

## Authentication
POST `/api/auth/register` or `/api/auth/login`, then send
`Authorization: Bearer <token>` on protected routes.
    """,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=config.CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth_router, prefix="/api")  # router already has /auth
app.include_router(stories.router, prefix="/api/stories", tags=["Stories"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
