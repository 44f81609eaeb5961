"""FastAPI application factory for hosting the chat client.

The NiceGUI page is mounted onto this app by ``stratsync.main``; the app
itself only carries lifecycle logging and a health check.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from stratsync import __version__
from stratsync.config import ClientConfig, get_client_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log application startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info(f"Starting StratSync client (backend: {app.state.config.api_base_url})...")
    yield
    logger.info("Shutting down StratSync client...")


def create_app(config: ClientConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Optional client configuration.
                Loads from environment if not provided.

    Returns:
        Configured FastAPI application instance.
    """
    config = config or get_client_config()

    application = FastAPI(
        title=f"{config.title} Client",
        description=(
            "Conversational client for the StratSync backend. Sends user "
            "queries, renders text and table replies, and produces on-demand "
            "HTML summaries."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.config = config

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "stratsync-client"}

    return application
