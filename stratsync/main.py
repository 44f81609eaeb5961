"""Main application entry point.

Runs FastAPI (port 8080) with the NiceGUI chat interface mounted.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI serves /health, NiceGUI serves the chat page at /.
    """
    import uvicorn
    from nicegui import ui

    from stratsync.api.app import create_app
    from stratsync.config import get_client_config
    from stratsync.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    config = get_client_config()
    app = create_app(config)

    # Mount NiceGUI onto FastAPI
    ui.run_with(app, title=config.title, favicon="💬")

    port = int(os.getenv("PORT", "8080"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"Backend configured at {config.api_base_url}")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_standalone() -> None:
    """Run the NiceGUI page on its own server, without the health endpoint."""
    from stratsync.ui.chat_page import main as run_ui

    run_ui()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=standalone to serve only the NiceGUI page.
    Default is integrated mode (FastAPI + NiceGUI on one port).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting StratSync client in {mode} mode")

    if mode == "standalone":
        run_standalone()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
