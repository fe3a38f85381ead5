"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Endpoints:
- /api/messages, /api/conversations, /api/express-interest
- /api/videos, /api/feed, /api/users, /api/moderation
- /ws (realtime), /metrics, /health
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zfounders.config.logging_config import setup_logging
from zfounders.config.settings import get_config
from zfounders.presentation.api import (
    conversations_router,
    feed_router,
    interests_router,
    messages_router,
    metrics_router,
    moderation_router,
    notifications_router,
    realtime_router,
    users_router,
    videos_router,
)
from zfounders.presentation.errors import register_exception_handlers
from zfounders.presentation.middleware import (
    CorrelationIdMiddleware,
    RequestMetricsMiddleware,
)
from zfounders.setup.ioc import create_container

logger = logging.getLogger(__name__)


def create_fastapi_app(config=None, container: Optional[AsyncContainer] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        config: Config class (defaults to get_config() for APP_ENV)
        container: prebuilt dishka container; tests pass one over a seeded store
    """
    config = config or get_config()
    setup_logging(config.LOG_LEVEL, config.LOG_PATH or None, config.LOG_FORMAT)
    container = container or create_container(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("FastAPI application started. DI container initialized.")
        yield
        # Disconnects Prisma / Redis when those backends are in use
        await app.state.dishka_container.close()
        logger.info("FastAPI application shutdown. DI container closed.")

    app = FastAPI(
        title="zfounders API",
        description="Access policy and messaging core for founders and investors",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container, app)

    app.add_middleware(RequestMetricsMiddleware)
    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    app.include_router(messages_router)
    app.include_router(conversations_router)
    app.include_router(interests_router)
    app.include_router(videos_router)
    app.include_router(feed_router)
    app.include_router(users_router)
    app.include_router(moderation_router)
    app.include_router(notifications_router)
    app.include_router(realtime_router)
    app.include_router(metrics_router)

    return app
