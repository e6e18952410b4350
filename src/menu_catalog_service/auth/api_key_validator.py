"""API key validation for catalog mutation endpoints.

Only endpoints that change the menu require a key; reads stay open. Keys are
compared in constant time against the configured set.
"""

import secrets


class APIKeyValidator:
    """Validates API keys sent by menu editors."""

    def __init__(self, api_keys: list[str]) -> None:
        """Initialize validator with list of valid API keys.

        Args:
            api_keys: List of valid API key strings

        Raises:
            ValueError: If api_keys list is empty
        """
        if not api_keys:
            raise ValueError("At least one API key must be provided")

        self.api_keys = tuple(dict.fromkeys(api_keys))

    def validate(self, api_key: str) -> bool:
        """Check an API key against every configured key.

        Args:
            api_key: The API key to validate

        Returns:
            bool: True if it matches a configured key exactly
        """
        if not api_key:
            return False
        candidate = api_key.encode()
        matched = False
        for key in self.api_keys:
            # no early exit, so timing does not reveal which key matched
            matched |= secrets.compare_digest(candidate, key.encode())
        return matched
