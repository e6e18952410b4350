"""Main application entry point for the menu catalog service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os

from fastapi import FastAPI

from menu_catalog_service.handlers.api_handler import create_app
from menu_catalog_service.observability import configure_logging, setup_observability
from menu_catalog_service.services.catalog_service import MenuCatalogService

logger = logging.getLogger(__name__)

DEVELOPMENT_API_KEY = "dummy-key-for-development"


def get_api_keys() -> list[str]:
    """Read admin API keys from ADMIN_API_KEY (comma-separated).

    Returns:
        List of configured keys, or the development key when none are set
    """
    api_keys_str = os.getenv("ADMIN_API_KEY", "")
    api_keys = [key.strip() for key in api_keys_str.split(",") if key.strip()]

    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - using the development key for mutations")
        api_keys = [DEVELOPMENT_API_KEY]

    return api_keys


def exporters_enabled() -> bool:
    """OTLP exporters run only when an endpoint is configured outside tests."""
    if os.getenv("ENVIRONMENT", "development") == "test":
        return False
    return bool(os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT"))


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the catalog engine
    3. Creates the FastAPI app with menu endpoints
    4. Sets up observability

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing menu catalog service...")

    catalog_service = MenuCatalogService()

    app = create_app(catalog_service=catalog_service, api_keys=get_api_keys())

    setup_observability(app, enable_exporters=exporters_enabled())

    logger.info("Menu catalog service initialized successfully")

    return app


# Skip building the app during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
