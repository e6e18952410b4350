"""Typed failures raised by the catalog engine.

The engine raises these and leaves reporting to its callers; the admin API
maps them onto HTTP status codes.
"""

from enum import Enum


class ValidationErrorReason(str, Enum):
    """Why a candidate was rejected."""

    EMPTY_FIELD = "empty_field"
    INVALID_PRICE = "invalid_price"
    INVALID_CATEGORY = "invalid_category"
    DUPLICATE_DISH = "duplicate_dish"


class MenuCatalogError(Exception):
    """Base class for catalog engine failures."""


class CatalogValidationError(MenuCatalogError):
    """A candidate payload may not be committed to the catalog."""

    def __init__(
        self,
        reason: ValidationErrorReason,
        message: str,
        field: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            reason: Rule that rejected the candidate
            message: Human-readable explanation
            field: Candidate field at fault, if a single one is
        """
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, str | None]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "reason": self.reason.value,
            "field": self.field,
            "message": self.message,
        }


class ItemNotFoundError(MenuCatalogError):
    """An operation referenced an item id not present in the catalog."""

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Menu item {item_id} not found")
        self.item_id = item_id
