"""Unit tests for the frontend server."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from menu_manager.handlers.frontend_handler import (
    DEFAULT_STATIC_DIR,
    create_frontend_app,
    resolve_static_file,
)


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Create a small static site."""
    site = tmp_path / "site"
    (site / "js").mkdir(parents=True)
    (site / "index.html").write_text("<html>menu</html>")
    (site / "js" / "app.js").write_text("console.log('menu');")
    (tmp_path / "secret.txt").write_text("do not serve")
    return site


@pytest.fixture
def client(static_dir: Path) -> TestClient:
    """Create a test client for the frontend app."""
    app = create_frontend_app(backend_api_url="http://api.example.com", static_dir=static_dir)
    return TestClient(app)


@pytest.mark.unit
class TestFrontendEndpoints:
    """Test suite for frontend endpoints."""

    def test_config_exposes_backend_url(self, client: TestClient) -> None:
        """Test that /api/config returns the configured backend URL."""
        response = client.get("/api/config")

        assert response.status_code == 200
        assert response.json() == {"backendApiUrl": "http://api.example.com"}

    def test_health_check(self, client: TestClient) -> None:
        """Test frontend health check."""
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "frontend"

    def test_serves_index(self, client: TestClient) -> None:
        """Test that the root path serves index.html."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == "<html>menu</html>"

    def test_serves_static_asset(self, client: TestClient) -> None:
        """Test that existing files are served as-is."""
        response = client.get("/js/app.js")

        assert response.status_code == 200
        assert response.text == "console.log('menu');"

    def test_unknown_path_falls_back_to_index(self, client: TestClient) -> None:
        """Test single-page-app fallback for unknown paths."""
        response = client.get("/menu/edit/3")

        assert response.status_code == 200
        assert response.text == "<html>menu</html>"


@pytest.mark.unit
class TestResolveStaticFile:
    """Tests for resolve_static_file."""

    def test_rejects_paths_outside_static_dir(self, static_dir: Path) -> None:
        """Test that traversal outside the static directory serves index.html."""
        resolved = resolve_static_file(static_dir, "../secret.txt")
        assert resolved == static_dir.resolve() / "index.html"

    def test_directory_falls_back_to_index(self, static_dir: Path) -> None:
        """Test that a directory path serves index.html."""
        assert resolve_static_file(static_dir, "js") == static_dir.resolve() / "index.html"

    def test_packaged_client_has_index(self) -> None:
        """Test that the packaged static directory ships index.html."""
        assert (DEFAULT_STATIC_DIR / "index.html").is_file()
