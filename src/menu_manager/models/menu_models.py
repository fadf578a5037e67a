"""Menu data models.

MenuItem is the stored record. MenuItemCreate and MenuItemUpdate are the
explicit request inputs for creation and partial update; they carry the
trimming and required-field rules so the repository only ever sees clean data.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


def reject_boolean_price(v: Any) -> Any:
    """JSON true/false is not a price, even though it coerces to 1.0/0.0."""
    if isinstance(v, bool):
        raise ValueError("must be a number")
    return v


class MenuItem(BaseModel):
    """Menu item model."""

    id: str = Field(..., description="Unique identifier assigned by the store")
    name: str = Field(..., description="Item name")
    description: str = Field(..., description="Item description")
    price: float = Field(..., description="Item price", allow_inf_nan=False)
    category: str = Field(..., description="Free-form category name")
    available: bool = Field(default=True, description="Whether item is currently available")


class MenuItemCreate(BaseModel):
    """Input for creating a menu item.

    name, description, price and category are required. Text fields must be
    non-empty after trimming; name and description are stored trimmed.
    """

    name: str = Field(..., description="Item name")
    description: str = Field(..., description="Item description")
    price: float = Field(..., description="Item price", allow_inf_nan=False)
    category: str = Field(..., description="Free-form category name")
    available: bool = Field(default=True, description="Whether item is currently available")

    @field_validator("name", "description")
    @classmethod
    def strip_and_require(cls, v: str) -> str:
        """Trim whitespace and reject empty text."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("category")
    @classmethod
    def require_category(cls, v: str) -> str:
        """Reject a blank category. The value itself is kept as supplied."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def price_not_boolean(cls, v: Any) -> Any:
        return reject_boolean_price(v)

    @field_validator("available", mode="before")
    @classmethod
    def default_available(cls, v: bool | None) -> bool:
        """Treat an explicit null as omitted."""
        return True if v is None else v


class MenuItemUpdate(BaseModel):
    """Partial update for a menu item.

    A field left as None is absent and keeps its stored value. No emptiness
    checks are applied here, so an update may clear a text field.
    """

    name: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, allow_inf_nan=False)
    category: str | None = None
    available: bool | None = None

    @field_validator("price", mode="before")
    @classmethod
    def price_not_boolean(cls, v: Any) -> Any:
        return reject_boolean_price(v)

    @field_validator("name", "description")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        """Trim whitespace from present text fields."""
        return v.strip() if v is not None else None

    def changes(self) -> dict[str, object]:
        """Fields present in this update."""
        return self.model_dump(exclude_none=True)


class MenuItemDeleted(BaseModel):
    """Response body for a successful delete."""

    message: str = "Item deleted successfully"
    item: MenuItem


class ErrorResponse(BaseModel):
    """Error body returned by the API."""

    error: str = Field(..., description="Machine-readable error category")
    message: str = Field(..., description="Human-readable explanation")
