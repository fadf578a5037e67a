"""In-memory repository for menu items.

The repository owns the ordered item collection and the id counter. Following
the repository pattern used elsewhere in the service, expected failures
(unknown ids) are reported as None rather than raised.
"""

import logging
import threading
from collections.abc import Iterable

from menu_manager.models.menu_models import MenuItem, MenuItemCreate, MenuItemUpdate

logger = logging.getLogger(__name__)


SEED_MENU_ITEMS: list[MenuItem] = [
    MenuItem(
        id="1",
        name="Margherita Pizza",
        description="Classic tomato sauce, fresh mozzarella, and basil",
        price=14.99,
        category="Pizza",
        available=True,
    ),
    MenuItem(
        id="2",
        name="Spaghetti Carbonara",
        description="Creamy pasta with pancetta, egg, and parmesan",
        price=16.99,
        category="Pasta",
        available=True,
    ),
    MenuItem(
        id="3",
        name="Caesar Salad",
        description="Romaine lettuce, croutons, parmesan, and Caesar dressing",
        price=10.99,
        category="Salads",
        available=True,
    ),
    MenuItem(
        id="4",
        name="Tiramisu",
        description="Classic Italian dessert with coffee-soaked ladyfingers and mascarpone",
        price=8.99,
        category="Desserts",
        available=True,
    ),
    MenuItem(
        id="5",
        name="Bruschetta",
        description="Toasted bread topped with fresh tomatoes, garlic, and basil",
        price=7.99,
        category="Appetizers",
        available=False,
    ),
]


class MenuItemRepository:
    """Repository for menu item CRUD operations.

    Items are kept in insertion order. Ids are minted from a monotonically
    increasing counter and never reused. Every operation holds a single lock,
    so concurrent requests never see a partially applied change.
    """

    def __init__(self, seed_items: Iterable[MenuItem] | None = None) -> None:
        """Initialize repository.

        Args:
            seed_items: Items to preload with their ids kept as given. The id
                counter starts one past the highest numeric seed id.
        """
        self._items: dict[str, MenuItem] = {}
        self._lock = threading.Lock()
        self.next_id = 1

        for item in seed_items or []:
            if item.id in self._items:
                raise ValueError(f"Duplicate seed item id: {item.id}")
            self._items[item.id] = item.model_copy()
            if item.id.isdigit():
                self.next_id = max(self.next_id, int(item.id) + 1)

        logger.info(f"Menu repository loaded with {len(self._items)} seed items")

    def list_items(self, category: str | None = None) -> list[MenuItem]:
        """List menu items in insertion order.

        Args:
            category: Optional category filter, matched case-insensitively

        Returns:
            list: Matching items (empty list if none)
        """
        with self._lock:
            items = list(self._items.values())

        if category:
            wanted = category.lower()
            items = [item for item in items if item.category.lower() == wanted]

        return [item.model_copy() for item in items]

    def get_item(self, item_id: str) -> MenuItem | None:
        """Retrieve a menu item by id.

        Args:
            item_id: Menu item identifier

        Returns:
            MenuItem if found, None otherwise
        """
        with self._lock:
            item = self._items.get(item_id)
            return item.model_copy() if item is not None else None

    def add_item(self, data: MenuItemCreate) -> MenuItem:
        """Store a new menu item under a freshly minted id.

        Args:
            data: Validated creation input

        Returns:
            MenuItem: The stored record
        """
        with self._lock:
            item = MenuItem(
                id=str(self.next_id),
                name=data.name,
                description=data.description,
                price=float(data.price),
                category=data.category,
                available=data.available,
            )
            self.next_id += 1
            self._items[item.id] = item
            return item.model_copy()

    def update_item(self, item_id: str, data: MenuItemUpdate) -> MenuItem | None:
        """Merge a partial update into a stored item.

        Args:
            item_id: Menu item identifier
            data: Fields to replace; absent fields keep their stored values

        Returns:
            MenuItem with the merged values if found, None otherwise
        """
        with self._lock:
            current = self._items.get(item_id)
            if current is None:
                return None

            changes = data.changes()
            if "price" in changes:
                changes["price"] = float(changes["price"])

            updated = current.model_copy(update=changes)
            self._items[item_id] = updated
            return updated.model_copy()

    def delete_item(self, item_id: str) -> MenuItem | None:
        """Remove a menu item permanently.

        Args:
            item_id: Menu item identifier

        Returns:
            The removed MenuItem if found, None otherwise
        """
        with self._lock:
            return self._items.pop(item_id, None)

    def count(self) -> int:
        """Number of stored items."""
        with self._lock:
            return len(self._items)
