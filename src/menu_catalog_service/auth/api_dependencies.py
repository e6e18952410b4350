"""FastAPI dependencies for API authentication."""

from typing import Annotated

from fastapi import Header, HTTPException

from menu_catalog_service.auth.api_key_validator import APIKeyValidator


def get_api_key_from_header(
    x_api_key: Annotated[str | None, Header()] = None,
    validator: APIKeyValidator | None = None,
) -> str:
    """Extract and validate the API key from the X-API-Key header.

    Args:
        x_api_key: API key from X-API-Key header (injected by FastAPI)
        validator: APIKeyValidator holding the accepted keys

    Returns:
        str: The validated API key

    Raises:
        HTTPException: 401 if API key is missing or invalid, 500 if no
            validator is configured
    """
    if not x_api_key:
        raise HTTPException(status_code=401, detail="Missing API key")

    if validator is None:
        raise HTTPException(status_code=500, detail="API key validation is not configured")

    if not validator.validate(x_api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")

    return x_api_key
