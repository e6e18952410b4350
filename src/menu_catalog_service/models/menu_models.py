"""Menu catalog data models.

These models represent the dishes held by the catalog engine and the
unvalidated payloads callers submit to create or edit them.
"""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Category(str, Enum):
    """Closed enumeration of menu courses."""

    STARTER = "Starter"
    MAIN = "Main"
    DESSERT = "Dessert"


# Sentinel selector for category filters that should return every item
ALL_CATEGORIES = "All"


class MenuItem(BaseModel):
    """A dish stored in the catalog.

    Instances are immutable: the engine replaces an item on update rather
    than mutating it, so snapshots handed to callers never change underneath
    them.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Engine-assigned identifier, never reused")
    name: str = Field(..., description="Dish name, trimmed", min_length=1)
    description: str = Field(..., description="Dish description, trimmed", min_length=1)
    price: Decimal = Field(..., description="Price with two decimal places", gt=0)
    category: Category = Field(..., description="Course this dish belongs to")

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> str:
        """Serialize price as a fixed two-decimal string."""
        return f"{price:.2f}"


class MenuItemCandidate(BaseModel):
    """Unvalidated payload proposed for create or update.

    Fields are deliberately loose: price arrives as raw text from a form or as
    a number from JSON, and category as free text. Normalization and rule
    checks happen in the validation layer, not here.
    """

    name: str | None = Field(default=None, description="Proposed dish name")
    description: str | None = Field(default=None, description="Proposed dish description")
    price: str | Decimal | int | float | None = Field(
        default=None, description="Proposed price, raw text or number"
    )
    category: Category | str = Field(default=Category.STARTER, description="Proposed category")

    @field_validator("price", mode="before")
    @classmethod
    def keep_bool_price_as_text(cls, v: Any) -> Any:
        """Stop the number members of the union from coercing booleans to 0 or 1."""
        if isinstance(v, bool):
            return str(v).lower()
        return v


class NormalizedItem(BaseModel):
    """Candidate fields after trimming and rounding, ready for commit."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    price: Decimal
    category: Category
