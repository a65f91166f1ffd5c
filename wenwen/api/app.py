"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wenwen import __version__
from wenwen.api.chat import router as chat_router
from wenwen.api.pinyin import router as pinyin_router
from wenwen.api.sessions import router as sessions_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting WenWen API...")
    yield
    # Shutdown
    logger.info("Shutting down WenWen API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="WenWen API",
        description=(
            "Chinese practice chat backend. Stores conversations locally, relays "
            "each user turn to a DeepSeek-compatible completion endpoint, streams "
            "the reply back as Server-Sent Events, and annotates text with pinyin."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(sessions_router)
    application.include_router(chat_router)
    application.include_router(pinyin_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "wenwen"}

    return application


app = create_app()
