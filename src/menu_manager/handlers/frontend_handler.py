"""FastAPI application serving the browser client and its runtime config."""

import logging
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


class ClientConfig(BaseModel):
    """Configuration forwarded to the browser client."""

    model_config = ConfigDict(populate_by_name=True)

    backend_api_url: str = Field(..., alias="backendApiUrl")


class FrontendHealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str


def resolve_static_file(static_dir: Path, requested: str) -> Path:
    """Find the file to serve for a request path.

    Paths that do not name an existing file inside static_dir fall back to
    index.html so client-side routes still load the app.

    Args:
        static_dir: Root directory of the client assets
        requested: Request path relative to the site root

    Returns:
        Path of the file to send
    """
    root = static_dir.resolve()
    candidate = (root / requested).resolve()

    if candidate.is_relative_to(root) and candidate.is_file():
        return candidate
    return root / "index.html"


def create_frontend_app(backend_api_url: str, static_dir: Path = DEFAULT_STATIC_DIR) -> FastAPI:
    """Create the FastAPI application that hosts the static client.

    Args:
        backend_api_url: Base URL of the menu API handed to the client
        static_dir: Directory containing index.html and the client assets

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(title="Restaurant Menu Manager", docs_url=None, redoc_url=None)

    app.state.backend_api_url = backend_api_url
    app.state.static_dir = static_dir

    @app.get("/api/config", response_model=ClientConfig)
    async def get_config() -> ClientConfig:
        """Expose the backend API URL to the browser client."""
        return ClientConfig(backend_api_url=app.state.backend_api_url)

    @app.get("/api/health", response_model=FrontendHealthResponse)
    async def health_check() -> FrontendHealthResponse:
        return FrontendHealthResponse(
            status="healthy",
            service="frontend",
            timestamp=datetime.now(UTC).isoformat(),
        )

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_client(full_path: str) -> FileResponse:
        return FileResponse(resolve_static_file(app.state.static_dir, full_path))

    logger.info(f"Frontend configured with backend API URL: {backend_api_url}")
    return app
