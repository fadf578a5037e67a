"""Shared pytest fixtures and configuration for all tests."""

import os

# Entry-point modules skip building their real apps at import time in test mode
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402

from menu_manager.models.menu_models import MenuItem  # noqa: E402
from menu_manager.repositories.menu_repository import MenuItemRepository  # noqa: E402
from menu_manager.services.menu_service import MenuService  # noqa: E402


@pytest.fixture
def margherita() -> MenuItem:
    """Fixture providing the single seeded pizza used across tests."""
    return MenuItem(
        id="1",
        name="Margherita Pizza",
        description="Classic tomato sauce, fresh mozzarella, and basil",
        price=14.99,
        category="Pizza",
        available=True,
    )


@pytest.fixture
def soda_payload() -> dict:
    """Fixture providing a valid creation payload."""
    return {
        "name": "Soda",
        "description": "Cold drink",
        "price": 2.5,
        "category": "Drinks",
    }


@pytest.fixture
def repository(margherita: MenuItem) -> MenuItemRepository:
    """Fixture providing a store seeded with one item."""
    return MenuItemRepository(seed_items=[margherita])


@pytest.fixture
def menu_service(repository: MenuItemRepository) -> MenuService:
    """Fixture providing a MenuService over the seeded store."""
    return MenuService(repository=repository)
