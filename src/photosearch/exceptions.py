"""Custom exceptions for photosearch.

Exception Hierarchy:
    PhotoSearchError (base)
    ├── ConfigError - Configuration or manifest loading/validation failures
    ├── SecretStoreError - Secret storage read/write failures
    ├── UnsplashAPIError - Non-success HTTP status from the Unsplash API
    └── ResolverNotFoundError - No resolver registered under a name

None of these reach the agent or the end user directly: the action and the
resolvers convert them into structured, user-safe responses.
"""

from typing import Any


class PhotoSearchError(Exception):
    """Base exception for all photosearch errors.

    Args:
        message: Human-readable error message.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigError(PhotoSearchError):
    """Raised when configuration or the agent manifest cannot be loaded.

    Examples:
        - Invalid YAML syntax in .photosearch.yaml
        - Unknown secret store backend
        - Manifest action missing its inputs
    """


class SecretStoreError(PhotoSearchError):
    """Raised when the secret store cannot read or write a secret.

    Examples:
        - Store used before initialize()
        - SQLite database locked or unwritable
    """


class UnsplashAPIError(PhotoSearchError):
    """Raised when the Unsplash API answers with a non-success status.

    The response body is kept for operator logs only.

    Args:
        status_code: HTTP status code returned by the API.
        body: Raw response body text.
    """

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(
            f"Unsplash API returned HTTP {status_code}",
            details={"status_code": status_code},
        )
        self.status_code = status_code
        self.body = body

    @property
    def is_unauthorized(self) -> bool:
        """Whether the API rejected the access key."""
        return self.status_code == 401


class ResolverNotFoundError(PhotoSearchError):
    """Raised when invoking a resolver name that was never defined."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No resolver defined for '{name}'", details={"resolver": name})
        self.name = name
