"""Read-only queries over a sequence of menu items."""

from collections.abc import Iterable
from decimal import Decimal

from menu_catalog_service.models.menu_models import ALL_CATEGORIES, Category, MenuItem
from menu_catalog_service.services.menu_validation import round_price

CategorySelector = Category | str


def resolve_selector(selector: CategorySelector) -> Category | None:
    """Resolve a filter selector.

    Args:
        selector: The "All" sentinel, a Category, or a category's exact value

    Returns:
        The selected Category, or None when every category is selected

    Raises:
        ValueError: If the selector names no known category
    """
    if isinstance(selector, Category):
        return selector
    if selector == ALL_CATEGORIES:
        return None
    try:
        return Category(selector)
    except ValueError:
        allowed = ", ".join([ALL_CATEGORIES, *(c.value for c in Category)])
        raise ValueError(
            f"Unknown category selector '{selector}', expected one of: {allowed}"
        ) from None


def filter_by_category(items: Iterable[MenuItem], selector: CategorySelector) -> list[MenuItem]:
    """Return the items in the selected category, preserving order.

    Always builds a new list, so the result is a snapshot rather than a live
    view of the catalog.
    """
    category = resolve_selector(selector)
    if category is None:
        return list(items)
    return [item for item in items if item.category == category]


def count_by_category(items: Iterable[MenuItem]) -> dict[Category, int]:
    """Count items per category; every category is present as a key."""
    counts = {category: 0 for category in Category}
    for item in items:
        counts[item.category] += 1
    return counts


def average_price_by_category(items: Iterable[MenuItem]) -> dict[Category, Decimal | None]:
    """Compute the mean price of each category.

    Recomputed in full on every call. A category without items maps to None,
    which callers must treat as "no data" rather than a price of 0.00.

    Returns:
        dict: Category to mean price rounded half-up to two decimals, or None
    """
    totals: dict[Category, Decimal] = {category: Decimal("0") for category in Category}
    counts = {category: 0 for category in Category}

    for item in items:
        totals[item.category] += item.price
        counts[item.category] += 1

    return {
        category: round_price(totals[category] / counts[category]) if counts[category] else None
        for category in Category
    }
