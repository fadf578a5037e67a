"""Main application entry point for the menu API.

This module provides the FastAPI application factory and configuration
for running the backend locally or in production.
"""

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI

from menu_manager.handlers.api_handler import create_app
from menu_manager.observability import configure_logging, setup_observability
from menu_manager.repositories.menu_repository import SEED_MENU_ITEMS, MenuItemRepository
from menu_manager.services.menu_service import MenuService

logger = logging.getLogger(__name__)


def create_menu_repository() -> MenuItemRepository:
    """Create the in-memory menu store, seeded unless SEED_MENU is false.

    Returns:
        MenuItemRepository ready to serve requests
    """
    if os.getenv("SEED_MENU", "true").lower() == "true":
        return MenuItemRepository(seed_items=SEED_MENU_ITEMS)

    logger.info("Menu seeding disabled, starting with an empty menu")
    return MenuItemRepository()


def get_cors_origins() -> list[str]:
    """Read allowed CORS origins from CORS_ALLOW_ORIGINS (comma separated)."""
    origins_str = os.getenv("CORS_ALLOW_ORIGINS", "*")
    origins = [origin.strip() for origin in origins_str.split(",") if origin.strip()]
    return origins or ["*"]


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the menu store
    3. Creates the menu service
    4. Creates the FastAPI app with the menu endpoints
    5. Sets up observability when enabled

    Returns:
        Configured FastAPI application instance
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Initializing menu API...")

    repository = create_menu_repository()
    menu_service = MenuService(repository=repository)

    app = create_app(menu_service=menu_service, cors_origins=get_cors_origins())

    if os.getenv("ENABLE_TELEMETRY", "false").lower() == "true":
        setup_observability(app, item_count=repository.count)

    logger.info(f"Menu API initialized with {repository.count()} items")

    return app


load_dotenv()

# Create the FastAPI application instance (only when not in test mode)
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "3001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Backend API server starting on {host}:{port}")
    logger.info(f"Health check: http://{host}:{port}/api/health")
    logger.info(f"Menu items: http://{host}:{port}/api/menu")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.getenv("UVICORN_RELOAD", "false").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
