"""Custom metrics for the menu API."""

from collections.abc import Callable, Iterable

from opentelemetry import metrics
from opentelemetry.metrics import CallbackOptions, Meter, ObservableGauge, Observation

meter = metrics.get_meter("menu-api")

items_created_counter = meter.create_counter(
    name="menu_items_created_total",
    description="Total number of menu items created",
    unit="1",
)

items_updated_counter = meter.create_counter(
    name="menu_items_updated_total",
    description="Total number of menu item updates",
    unit="1",
)

items_deleted_counter = meter.create_counter(
    name="menu_items_deleted_total",
    description="Total number of menu items deleted",
    unit="1",
)

validation_failure_counter = meter.create_counter(
    name="menu_validation_failures_total",
    description="Total number of rejected menu item payloads by operation",
    unit="1",
)


def record_item_created(category: str) -> None:
    """Record a created menu item.

    Args:
        category: Category of the new item
    """
    items_created_counter.add(1, {"category": category})


def record_item_updated() -> None:
    """Record a successful menu item update."""
    items_updated_counter.add(1)


def record_item_deleted(category: str) -> None:
    """Record a deleted menu item.

    Args:
        category: Category of the removed item
    """
    items_deleted_counter.add(1, {"category": category})


def record_validation_failure(operation: str) -> None:
    """Record a payload rejected by validation.

    Args:
        operation: The operation that rejected it ("create" or "update")
    """
    validation_failure_counter.add(1, {"operation": operation})


def register_stored_items_gauge(
    item_count: Callable[[], int], target_meter: Meter | None = None
) -> ObservableGauge:
    """Report the number of stored menu items on every collection.

    The value is read from the store when metrics are collected, so seed
    items and every create or delete are reflected without bookkeeping.

    Args:
        item_count: Returns the current number of items in the store
        target_meter: Meter to register on (defaults to the module meter)

    Returns:
        The registered gauge
    """

    def observe(options: CallbackOptions) -> Iterable[Observation]:
        yield Observation(item_count())

    return (target_meter or meter).create_observable_gauge(
        name="menu_items_stored",
        callbacks=[observe],
        description="Current number of menu items in the store",
        unit="1",
    )
