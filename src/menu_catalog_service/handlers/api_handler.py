"""FastAPI application exposing the menu catalog over HTTP."""

import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Response
from pydantic import BaseModel

from menu_catalog_service.auth.api_dependencies import get_api_key_from_header
from menu_catalog_service.auth.api_key_validator import APIKeyValidator
from menu_catalog_service.models.errors import (
    CatalogValidationError,
    ItemNotFoundError,
    MenuCatalogError,
    ValidationErrorReason,
)
from menu_catalog_service.models.menu_models import ALL_CATEGORIES, MenuItem, MenuItemCandidate
from menu_catalog_service.observability.metrics import record_mutation, record_rejection
from menu_catalog_service.services import menu_queries
from menu_catalog_service.services.catalog_service import MenuCatalogService

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class MenuStatsResponse(BaseModel):
    """Aggregate statistics over the whole catalog.

    Averages are two-decimal strings; null means the category has no items.
    """

    total_items: int
    items_by_category: dict[str, int]
    average_price_by_category: dict[str, str | None]


def _to_http_error(operation: str, error: MenuCatalogError) -> HTTPException:
    """Log and count a rejected mutation, and map it to an HTTP error."""
    if isinstance(error, ItemNotFoundError):
        logger.warning(f"{operation} rejected: item {error.item_id} not found")
        record_rejection(operation, "not_found")
        return HTTPException(status_code=404, detail=str(error))

    if isinstance(error, CatalogValidationError):
        logger.warning(f"{operation} rejected: {error.reason.value} ({error.message})")
        record_rejection(operation, error.reason.value)
        status_code = 409 if error.reason == ValidationErrorReason.DUPLICATE_DISH else 422
        return HTTPException(status_code=status_code, detail=error.to_dict())

    raise error  # pragma: no cover


def create_app(catalog_service: MenuCatalogService, api_keys: list[str]) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        catalog_service: Engine owning the menu catalog
        api_keys: List of valid API keys for mutating endpoints

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Menu Catalog Service",
        description="Manage a restaurant menu: dishes, categories and price statistics",
        version="1.0.0",
    )

    app.state.catalog_service = catalog_service
    app.state.api_key_validator = APIKeyValidator(api_keys=api_keys)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    def validate_api_key(x_api_key: str | None = Header(None)) -> str:
        """Dependency to validate API key."""
        return get_api_key_from_header(x_api_key=x_api_key, validator=app.state.api_key_validator)

    @app.get("/menu/items", response_model=list[MenuItem], tags=["Menu Items"])
    async def list_items(category: str = ALL_CATEGORIES) -> list[MenuItem]:
        """List menu items in catalog order, optionally filtered by category.

        Args:
            category: "All" or one of Starter, Main, Dessert

        Raises:
            HTTPException: 422 if the category is unknown
        """
        try:
            items: list[MenuItem] = app.state.catalog_service.filter_by_category(category)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        return items

    @app.get("/menu/items/{item_id}", response_model=MenuItem, tags=["Menu Items"])
    async def get_item(item_id: str) -> MenuItem:
        """Get a single menu item.

        Raises:
            HTTPException: 404 if the item does not exist
        """
        try:
            item: MenuItem = app.state.catalog_service.get(item_id)
        except ItemNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        return item

    @app.post("/menu/items", response_model=MenuItem, status_code=201, tags=["Menu Items"])
    async def create_item(
        candidate: MenuItemCandidate,
        _api_key: str = Depends(validate_api_key),
    ) -> MenuItem:
        """Add a dish to the end of the menu.

        Raises:
            HTTPException: 409 for a duplicate dish, 422 for invalid fields
        """
        try:
            item: MenuItem = app.state.catalog_service.create(candidate)
        except MenuCatalogError as e:
            raise _to_http_error("create", e) from e

        logger.info(f"Menu item {item.id} created: {item.name} ({item.category.value})")
        record_mutation("create")
        return item

    @app.put("/menu/items/{item_id}", response_model=MenuItem, tags=["Menu Items"])
    async def update_item(
        item_id: str,
        candidate: MenuItemCandidate,
        _api_key: str = Depends(validate_api_key),
    ) -> MenuItem:
        """Replace a dish's fields, keeping its id and position.

        Raises:
            HTTPException: 404 if missing, 409 for a duplicate, 422 for invalid fields
        """
        try:
            item: MenuItem = app.state.catalog_service.update(item_id, candidate)
        except MenuCatalogError as e:
            raise _to_http_error("update", e) from e

        logger.info(f"Menu item {item_id} updated")
        record_mutation("update")
        return item

    @app.delete(
        "/menu/items/{item_id}",
        status_code=204,
        response_class=Response,
        tags=["Menu Items"],
    )
    async def delete_item(
        item_id: str,
        _api_key: str = Depends(validate_api_key),
    ) -> Response:
        """Delete a dish. Clients are expected to confirm with the user first.

        Raises:
            HTTPException: 404 if the item does not exist
        """
        try:
            app.state.catalog_service.delete(item_id)
        except MenuCatalogError as e:
            raise _to_http_error("delete", e) from e

        logger.info(f"Menu item {item_id} deleted")
        record_mutation("delete")
        return Response(status_code=204)

    @app.get("/menu/stats", response_model=MenuStatsResponse, tags=["Statistics"])
    async def get_stats() -> MenuStatsResponse:
        """Item counts and average price per category."""
        # one snapshot so the counts and averages agree with each other
        items = app.state.catalog_service.list_items()
        averages = menu_queries.average_price_by_category(items)
        counts = menu_queries.count_by_category(items)

        return MenuStatsResponse(
            total_items=len(items),
            items_by_category={category.value: n for category, n in counts.items()},
            average_price_by_category={
                category.value: f"{average:.2f}" if average is not None else None
                for category, average in averages.items()
            },
        )

    return app
