"""Shared pytest fixtures and configuration for all tests."""

from collections.abc import Callable

import pytest

from menu_catalog_service.models.menu_models import MenuItemCandidate
from menu_catalog_service.services.catalog_service import MenuCatalogService

CandidateFactory = Callable[..., MenuItemCandidate]


@pytest.fixture
def catalog_service() -> MenuCatalogService:
    """Fixture providing an empty catalog engine."""
    return MenuCatalogService()


@pytest.fixture
def make_candidate() -> CandidateFactory:
    """Fixture providing a factory for candidates with sensible defaults."""

    def factory(
        name: str | None = "Lasagna",
        description: str | None = "Pasta with meat",
        price: str | float | int | None = "165.00",
        category: str = "Main",
    ) -> MenuItemCandidate:
        return MenuItemCandidate(
            name=name,
            description=description,
            price=price,
            category=category,
        )

    return factory


@pytest.fixture
def mock_menu_payloads() -> list[dict]:
    """Fixture providing sample request bodies for the admin API."""
    return [
        {
            "name": "Garlic Bread",
            "description": "Toasted ciabatta with garlic butter",
            "price": "45.50",
            "category": "Starter",
        },
        {
            "name": "Lasagna",
            "description": "Pasta with meat",
            "price": "165.00",
            "category": "Main",
        },
        {
            "name": "Malva Pudding",
            "description": "Warm sponge with custard",
            "price": 70,
            "category": "Dessert",
        },
    ]
