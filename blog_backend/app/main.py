"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blog_backend.app.api.error_handlers import register_error_handlers
from blog_backend.app.api.routes.health import router as health_router
from blog_backend.app.api.routes.posts import router as posts_router
from blog_backend.app.core.logging import EVENT_APP_START, EVENT_CONFIG_LOADED, setup_logging
from blog_backend.app.core.settings import settings
from blog_backend.app.db.engine import init_db
from blog_backend.app.db.migrations import run_migrations

setup_logging(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info(EVENT_APP_START)
    logger.info("%s: %s", EVENT_CONFIG_LOADED, settings.safe_dump())
    # A store we cannot reach aborts startup before any request is accepted.
    init_db()
    run_migrations()
    logger.info(
        "Blog API ready on %s:%d", settings.api_host, settings.api_port,
    )
    yield
    logger.info("Blog API shutting down")


app = FastAPI(
    title="Markdown Blog API",
    version="0.1.0",
    description="CRUD API for markdown blog posts.",
    lifespan=lifespan,
)

register_error_handlers(app)

app.include_router(health_router, tags=["health"])
app.include_router(posts_router, tags=["posts"])
