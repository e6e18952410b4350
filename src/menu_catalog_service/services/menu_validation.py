"""Validation and duplicate-detection rules for menu item candidates.

Every function in this module is pure: it reads the catalog snapshot it is
given and never mutates it. The catalog engine calls `validate` before any
commit, so a rejected candidate never touches catalog state.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from menu_catalog_service.models.errors import CatalogValidationError, ValidationErrorReason
from menu_catalog_service.models.menu_models import (
    Category,
    MenuItem,
    MenuItemCandidate,
    NormalizedItem,
)

TWO_PLACES = Decimal("0.01")


def round_price(value: Decimal) -> Decimal:
    """Round a price to two decimal places, halves rounding away from zero."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def name_key(name: str) -> str:
    """Comparison key for case-insensitive dish name matching."""
    return name.strip().casefold()


def _normalize_text(value: str | None, field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise CatalogValidationError(
            ValidationErrorReason.EMPTY_FIELD,
            f"{field.capitalize()} must not be empty",
            field=field,
        )
    return text


def parse_price(raw: str | Decimal | int | float | None) -> Decimal:
    """Parse and round a raw price.

    Args:
        raw: Price as entered, either text or a number

    Returns:
        Decimal: Price rounded to two decimal places

    Raises:
        CatalogValidationError: EMPTY_FIELD if the price is missing or not a
            finite number, INVALID_PRICE if it is not strictly positive
    """
    if raw is None or isinstance(raw, bool):
        raise CatalogValidationError(
            ValidationErrorReason.EMPTY_FIELD, "Price is required", field="price"
        )

    try:
        if isinstance(raw, str):
            # Decimal() would read "1_000" as 1000
            if "_" in raw:
                raise InvalidOperation
            value = Decimal(raw.strip())
        else:
            # floats go through str() so 0.1 parses as 0.1, not its binary expansion
            value = Decimal(str(raw))
    except InvalidOperation:
        raise CatalogValidationError(
            ValidationErrorReason.EMPTY_FIELD,
            f"Price '{raw}' is not a number",
            field="price",
        ) from None

    try:
        if not value.is_finite():
            raise InvalidOperation
        rounded = round_price(value)
    except InvalidOperation:
        raise CatalogValidationError(
            ValidationErrorReason.EMPTY_FIELD,
            f"Price '{raw}' is not a representable amount",
            field="price",
        ) from None

    if rounded <= 0:
        raise CatalogValidationError(
            ValidationErrorReason.INVALID_PRICE,
            "Price must be greater than zero",
            field="price",
        )
    return rounded


def parse_category(raw: Category | str) -> Category:
    """Resolve a category, matching the enumeration values exactly.

    Raises:
        CatalogValidationError: INVALID_CATEGORY for anything else
    """
    if isinstance(raw, Category):
        return raw
    try:
        return Category(raw)
    except ValueError:
        allowed = ", ".join(c.value for c in Category)
        raise CatalogValidationError(
            ValidationErrorReason.INVALID_CATEGORY,
            f"Category '{raw}' is not one of: {allowed}",
            field="category",
        ) from None


def find_duplicate(
    name: str,
    category: Category,
    items: Iterable[MenuItem],
    exclude_id: str | None = None,
) -> MenuItem | None:
    """Find an existing item that is the same dish in the same course.

    Args:
        name: Dish name to look for, matched case-insensitively
        category: Category to look in, matched exactly
        items: Catalog snapshot to search
        exclude_id: Id of the item being edited, which never counts as its
            own duplicate

    Returns:
        The first colliding item, or None
    """
    key = name_key(name)
    for item in items:
        if item.id == exclude_id:
            continue
        if item.category == category and name_key(item.name) == key:
            return item
    return None


def validate(
    candidate: MenuItemCandidate,
    items: Iterable[MenuItem],
    exclude_id: str | None = None,
) -> NormalizedItem:
    """Decide whether a candidate may be committed to the catalog.

    Checks run in order (text fields, price, category, duplicates) and the
    first failure is raised.

    Args:
        candidate: Unvalidated payload
        items: Current catalog snapshot
        exclude_id: Id of the item being updated, None for a create

    Returns:
        NormalizedItem: Trimmed, rounded fields ready for commit

    Raises:
        CatalogValidationError: If any rule rejects the candidate
    """
    name = _normalize_text(candidate.name, "name")
    description = _normalize_text(candidate.description, "description")
    price = parse_price(candidate.price)
    category = parse_category(candidate.category)

    duplicate = find_duplicate(name, category, items, exclude_id=exclude_id)
    if duplicate is not None:
        raise CatalogValidationError(
            ValidationErrorReason.DUPLICATE_DISH,
            f"A {category.value} named '{duplicate.name}' already exists",
            field="name",
        )

    return NormalizedItem(name=name, description=description, price=price, category=category)
