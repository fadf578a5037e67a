"""Menu service for validating requests and running store operations."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from menu_manager.models.menu_models import MenuItem, MenuItemCreate, MenuItemUpdate
from menu_manager.observability import metrics
from menu_manager.observability.decorators import traced
from menu_manager.repositories.menu_repository import MenuItemRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Name, description, price, and category are required"


class MenuErrorKind(str, Enum):
    """Expected failure outcomes of a menu operation."""

    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"


@dataclass
class MenuResult:
    """Outcome of a menu operation.

    Attributes:
        success: Whether the operation completed
        item: The created, fetched, updated or removed item on success
        error_kind: Failure category when success is False
        error_message: Human-readable failure description
    """

    success: bool
    item: MenuItem | None = None
    error_kind: MenuErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, item: MenuItem) -> "MenuResult":
        return cls(success=True, item=item)

    @classmethod
    def not_found(cls, item_id: str) -> "MenuResult":
        return cls(
            success=False,
            error_kind=MenuErrorKind.NOT_FOUND,
            error_message=f"No menu item found with id: {item_id}",
        )

    @classmethod
    def validation_failed(cls, message: str) -> "MenuResult":
        return cls(success=False, error_kind=MenuErrorKind.VALIDATION_FAILED, error_message=message)


def _invalid_fields(error: ValidationError) -> str:
    fields = sorted({str(err["loc"][0]) for err in error.errors() if err["loc"]})
    return ", ".join(fields) or "body"


class MenuService:
    """Service mediating every read and write of the menu.

    Raw request payloads are parsed into explicit input models here, so the
    repository never sees unvalidated data. Expected failures come back as
    MenuResult outcomes; the HTTP layer decides how to present them.
    """

    def __init__(self, repository: MenuItemRepository) -> None:
        """Initialize the MenuService.

        Args:
            repository: Store owning the menu items
        """
        self.repository = repository

    def list_items(self, category: str | None = None) -> list[MenuItem]:
        """List menu items, optionally filtered by category (case-insensitive)."""
        return self.repository.list_items(category=category)

    def get_item(self, item_id: str) -> MenuResult:
        item = self.repository.get_item(item_id)
        if item is None:
            return MenuResult.not_found(item_id)
        return MenuResult.ok(item)

    @traced("menu.create_item")
    def create_item(self, payload: dict[str, Any]) -> MenuResult:
        """Validate a creation payload and store the new item.

        Args:
            payload: Request body with name, description, price, category and
                optionally available

        Returns:
            MenuResult with the stored item, or VALIDATION_FAILED
        """
        try:
            data = MenuItemCreate.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Rejected menu item payload, invalid fields: {_invalid_fields(e)}")
            metrics.record_validation_failure("create")
            return MenuResult.validation_failed(REQUIRED_FIELDS_MESSAGE)

        item = self.repository.add_item(data)
        metrics.record_item_created(item.category)
        logger.info(f"Created new item: {item.name} (ID: {item.id})")
        return MenuResult.ok(item)

    @traced("menu.update_item")
    def update_item(self, item_id: str, payload: dict[str, Any]) -> MenuResult:
        """Apply a partial update to an existing item.

        Fields missing from the payload (or null) keep their stored values.
        The merged record is not re-validated.

        Args:
            item_id: The item to update
            payload: Request body with any subset of the item fields

        Returns:
            MenuResult with the merged item, NOT_FOUND, or VALIDATION_FAILED
            when a supplied field has the wrong type
        """
        if self.repository.get_item(item_id) is None:
            return MenuResult.not_found(item_id)

        try:
            data = MenuItemUpdate.model_validate(payload)
        except ValidationError as e:
            invalid = _invalid_fields(e)
            logger.warning(f"Rejected update for item {item_id}, invalid fields: {invalid}")
            metrics.record_validation_failure("update")
            return MenuResult.validation_failed(f"Invalid menu item fields: {invalid}")

        item = self.repository.update_item(item_id, data)
        if item is None:
            # Deleted between the lookup and the update
            return MenuResult.not_found(item_id)

        metrics.record_item_updated()
        logger.info(f"Updated item: {item.name} (ID: {item.id})")
        return MenuResult.ok(item)

    @traced("menu.delete_item")
    def delete_item(self, item_id: str) -> MenuResult:
        """Remove an item and return it. Its id is never handed out again."""
        item = self.repository.delete_item(item_id)
        if item is None:
            return MenuResult.not_found(item_id)

        metrics.record_item_deleted(item.category)
        logger.info(f"Deleted item: {item.name} (ID: {item.id})")
        return MenuResult.ok(item)

    def item_count(self) -> int:
        return self.repository.count()
