"""Entry point for the frontend server.

Serves the static browser client and tells it where the menu API lives.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from menu_manager.handlers.frontend_handler import DEFAULT_STATIC_DIR, create_frontend_app
from menu_manager.observability import configure_logging

logger = logging.getLogger(__name__)


def create_frontend_application() -> FastAPI:
    """Create the frontend application from environment configuration.

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    backend_api_url = os.getenv("BACKEND_API_URL", "http://localhost:3001")
    static_dir = Path(os.getenv("STATIC_DIR", str(DEFAULT_STATIC_DIR)))

    if not (static_dir / "index.html").is_file():
        raise ValueError(f"STATIC_DIR must contain index.html: {static_dir}")

    return create_frontend_app(backend_api_url=backend_api_url, static_dir=static_dir)


load_dotenv()

if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_frontend_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8081"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Frontend server starting on {host}:{port}")

    uvicorn.run(
        "frontend_main:app",
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
