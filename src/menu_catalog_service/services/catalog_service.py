"""Menu catalog engine: the only owner of catalog state."""

import logging
import threading
import uuid
from decimal import Decimal

from menu_catalog_service.models.errors import ItemNotFoundError
from menu_catalog_service.models.menu_models import (
    ALL_CATEGORIES,
    Category,
    MenuItem,
    MenuItemCandidate,
    NormalizedItem,
)
from menu_catalog_service.observability.decorators import traced
from menu_catalog_service.services import menu_queries
from menu_catalog_service.services.menu_queries import CategorySelector
from menu_catalog_service.services.menu_validation import find_duplicate, validate

logger = logging.getLogger(__name__)


class MenuCatalogService:
    """Engine owning an ordered, in-memory collection of menu items.

    All mutations go through create, update and delete, which validate the
    candidate against the current catalog before committing. Each call is
    atomic: it either commits fully or raises and leaves the catalog as it
    was. A re-entrant lock serializes callers so a validate-then-commit can
    never interleave with another mutation.

    Query methods return new lists of immutable items; callers never get a
    reference to the engine's own list.
    """

    def __init__(self) -> None:
        """Initialize an empty catalog."""
        self._items: list[MenuItem] = []
        self._issued_ids: set[str] = set()
        self._lock = threading.RLock()

    def _new_id(self) -> str:
        item_id = f"item_{uuid.uuid4().hex[:12]}"
        while item_id in self._issued_ids:
            item_id = f"item_{uuid.uuid4().hex[:12]}"  # pragma: no cover
        self._issued_ids.add(item_id)
        return item_id

    def _index_of(self, item_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        raise ItemNotFoundError(item_id)

    @staticmethod
    def _build(item_id: str, fields: NormalizedItem) -> MenuItem:
        return MenuItem(id=item_id, **fields.model_dump())

    @traced("catalog.create")
    def create(self, candidate: MenuItemCandidate) -> MenuItem:
        """Validate a candidate and append it to the catalog.

        Args:
            candidate: Proposed dish

        Returns:
            MenuItem: The stored item with its newly assigned id

        Raises:
            CatalogValidationError: If the candidate breaks a catalog rule
        """
        with self._lock:
            fields = validate(candidate, self._items)
            item = self._build(self._new_id(), fields)
            self._items.append(item)

        logger.debug(f"Created menu item {item.id} ({item.category.value})")
        return item

    @traced("catalog.update")
    def update(self, item_id: str, candidate: MenuItemCandidate) -> MenuItem:
        """Replace every field of an existing item except its id.

        The item keeps its position in the catalog, and it never counts as
        a duplicate of itself.

        Args:
            item_id: Id of the item to edit
            candidate: Replacement fields

        Returns:
            MenuItem: The updated item

        Raises:
            ItemNotFoundError: If no item has this id
            CatalogValidationError: If the candidate breaks a catalog rule
        """
        with self._lock:
            index = self._index_of(item_id)
            fields = validate(candidate, self._items, exclude_id=item_id)
            item = self._build(item_id, fields)
            self._items[index] = item

        logger.debug(f"Updated menu item {item_id}")
        return item

    @traced("catalog.delete")
    def delete(self, item_id: str) -> None:
        """Remove an item. Irreversible; its id is never issued again.

        Raises:
            ItemNotFoundError: If no item has this id
        """
        with self._lock:
            del self._items[self._index_of(item_id)]

        logger.debug(f"Deleted menu item {item_id}")

    def get(self, item_id: str) -> MenuItem:
        """Look up a single item by id.

        Raises:
            ItemNotFoundError: If no item has this id
        """
        with self._lock:
            return self._items[self._index_of(item_id)]

    def list_items(self) -> list[MenuItem]:
        """Return the full catalog in insertion order."""
        with self._lock:
            return list(self._items)

    def count(self) -> int:
        """Return the total number of items in the catalog."""
        with self._lock:
            return len(self._items)

    def filter_by_category(self, selector: CategorySelector = ALL_CATEGORIES) -> list[MenuItem]:
        """Return items in the selected category ("All" for every item).

        Raises:
            ValueError: If the selector names no known category
        """
        return menu_queries.filter_by_category(self.list_items(), selector)

    def average_price_by_category(self) -> dict[Category, Decimal | None]:
        """Mean price per category; None marks a category with no items."""
        return menu_queries.average_price_by_category(self.list_items())

    def count_by_category(self) -> dict[Category, int]:
        """Number of items per category."""
        return menu_queries.count_by_category(self.list_items())

    def find_duplicate(
        self,
        name: str,
        category: Category,
        exclude_id: str | None = None,
    ) -> MenuItem | None:
        """Return the item a dish with this name and category would collide with."""
        return find_duplicate(name, category, self.list_items(), exclude_id=exclude_id)
