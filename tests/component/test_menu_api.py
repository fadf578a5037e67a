"""Component tests for the menu API over a real in-memory store."""

import pytest
from fastapi.testclient import TestClient

from menu_manager.handlers.api_handler import create_app
from menu_manager.repositories.menu_repository import SEED_MENU_ITEMS, MenuItemRepository
from menu_manager.services.menu_service import MenuService


@pytest.mark.component
class TestMenuLifecycle:
    """End-to-end create, update and delete through HTTP."""

    @pytest.fixture
    def client(self, repository: MenuItemRepository) -> TestClient:
        """Create a client over a store seeded with the Margherita pizza."""
        return TestClient(create_app(menu_service=MenuService(repository=repository)))

    def test_create_update_delete_scenario(self, client: TestClient) -> None:
        """Walk one item through its full lifecycle."""
        created = client.post(
            "/items",
            json={"name": "Soda", "description": "Cold drink", "price": 2.5, "category": "Drinks"},
        )
        assert created.status_code == 201
        soda = {
            "id": "2",
            "name": "Soda",
            "description": "Cold drink",
            "price": 2.5,
            "category": "Drinks",
            "available": True,
        }
        assert created.json() == soda

        updated = client.put("/items/2", json={"available": False})
        assert updated.status_code == 200
        assert updated.json() == {**soda, "available": False}

        deleted = client.delete("/items/2")
        assert deleted.status_code == 200
        assert deleted.json()["item"] == {**soda, "available": False}

        assert client.get("/items/2").status_code == 404

        recreated = client.post(
            "/items",
            json={"name": "Soda", "description": "Cold drink", "price": 2.5, "category": "Drinks"},
        )
        assert recreated.json()["id"] == "3"

    def test_validation_failure_leaves_listing_unchanged(self, client: TestClient) -> None:
        """Test that rejected creates have no visible effect."""
        before = client.get("/items").json()

        for body in (
            {"description": "No name", "price": 1, "category": "Misc"},
            {"name": "No description", "description": "", "price": 1, "category": "Misc"},
            {"name": "No price", "description": "Missing", "category": "Misc"},
        ):
            assert client.post("/items", json=body).status_code == 400

        assert client.get("/items").json() == before
        assert client.get("/api/health").json()["itemCount"] == len(before)

    def test_update_can_clear_name(self, client: TestClient) -> None:
        """Test that partial updates are not re-validated."""
        response = client.put("/items/1", json={"name": "   "})

        assert response.status_code == 200
        assert response.json()["name"] == ""


@pytest.mark.component
class TestSeededMenu:
    """Tests against the full seed menu, as the backend starts by default."""

    @pytest.fixture
    def client(self) -> TestClient:
        """Create a client over the default seed menu."""
        repository = MenuItemRepository(seed_items=SEED_MENU_ITEMS)
        return TestClient(create_app(menu_service=MenuService(repository=repository)))

    def test_lists_seed_menu_in_order(self, client: TestClient) -> None:
        """Test that the seed menu lists in id order."""
        items = client.get("/api/menu").json()

        assert [item["id"] for item in items] == ["1", "2", "3", "4", "5"]
        assert items[4]["available"] is False

    def test_filter_by_category_through_client_path(self, client: TestClient) -> None:
        """Test lower-case category filtering on the client path."""
        items = client.get("/api/menu", params={"category": "pizza"}).json()

        assert [item["name"] for item in items] == ["Margherita Pizza"]

    def test_first_created_item_gets_id_six(self, client: TestClient) -> None:
        """Test that new ids start after the seed ids."""
        response = client.post(
            "/api/menu",
            json={"name": "Gelato", "description": "Pistachio", "price": "4.5", "category": "Desserts"},
        )

        assert response.status_code == 201
        assert response.json()["id"] == "6"
        assert response.json()["price"] == 4.5
