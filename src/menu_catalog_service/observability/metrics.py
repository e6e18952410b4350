"""Custom metrics for the menu catalog service."""

from opentelemetry import metrics

meter = metrics.get_meter("menu-catalog-svc")

mutation_counter = meter.create_counter(
    name="menu_item_mutations_total",
    description="Total number of committed menu item mutations by operation",
    unit="1",
)

rejection_counter = meter.create_counter(
    name="menu_item_rejections_total",
    description="Total number of rejected menu item mutations by operation and reason",
    unit="1",
)

# Current number of items held by the catalog
catalog_size = meter.create_up_down_counter(
    name="menu_catalog_items",
    description="Current number of items in the menu catalog",
    unit="1",
)


def record_mutation(operation: str) -> None:
    """Record a committed mutation.

    Args:
        operation: The operation performed ("create", "update", "delete")
    """
    mutation_counter.add(1, {"operation": operation})
    if operation == "create":
        catalog_size.add(1)
    elif operation == "delete":
        catalog_size.add(-1)


def record_rejection(operation: str, reason: str) -> None:
    """Record a mutation the catalog refused.

    Args:
        operation: The operation attempted
        reason: Validation reason value, or "not_found"
    """
    rejection_counter.add(1, {"operation": operation, "reason": reason})
