"""Constants and configuration defaults for photosearch.

This module contains all magic values, default configurations, and constants
used throughout the application. Import from here instead of hardcoding values.
"""

from typing import Final

# =============================================================================
# VERSION
# =============================================================================
VERSION: Final[str] = "0.1.0"

# =============================================================================
# HTTP CLIENT DEFAULTS
# =============================================================================
DEFAULT_HTTP_TIMEOUT_SECONDS: Final[float] = 30.0

# =============================================================================
# UNSPLASH API
# =============================================================================
UNSPLASH_SERVICE_NAME: Final[str] = "Unsplash"
UNSPLASH_API_BASE_URL: Final[str] = "https://api.unsplash.com"
UNSPLASH_SEARCH_PATH: Final[str] = "/search/photos"
UNSPLASH_PER_PAGE: Final[int] = 10
UNSPLASH_DEVELOPERS_URL: Final[str] = "https://unsplash.com/developers"

# =============================================================================
# SECRETS
# =============================================================================
ACCESS_KEY_SECRET_NAME: Final[str] = "unsplash-access-key"
DEFAULT_SECRETS_DB_PATH: Final[str] = ".photosearch/secrets.db"

# =============================================================================
# USER-FACING MESSAGES
# =============================================================================
MSG_NOT_CONFIGURED: Final[str] = (
    "Unsplash access key not configured. "
    "Please contact your administrator to set up the access key."
)
MSG_QUERY_REQUIRED: Final[str] = "Search query is required"
MSG_INVALID_ACCESS_KEY: Final[str] = (
    "Invalid access key. Please contact your administrator to update the Unsplash access key."
)
MSG_SEARCH_FAILED: Final[str] = "Failed to search photos. Please try again later."
MSG_UNTITLED: Final[str] = "Untitled"

MSG_ACCESS_KEY_REQUIRED: Final[str] = "Access key is required"
MSG_ACCESS_KEY_SAVED: Final[str] = "Access key saved successfully"
MSG_ACCESS_KEY_SAVE_FAILED: Final[str] = "Failed to save Access key. Please try again."
MSG_ACCESS_KEY_CHECK_FAILED: Final[str] = "Failed to check access key status."

# =============================================================================
# ACTIONS AND RESOLVERS
# =============================================================================
ACTION_SEARCH_PHOTOS: Final[str] = "search-photos"
RESOLVER_SAVE_ACCESS_KEY: Final[str] = "saveAccessKey"
RESOLVER_IS_ACCESS_KEY_SET: Final[str] = "isAccessKeySet"

# =============================================================================
# MCP SERVER
# =============================================================================
MCP_SERVER_NAME: Final[str] = "photosearch"

# =============================================================================
# CONFIG FILES
# =============================================================================
CONFIG_FILE_NAME: Final[str] = ".photosearch.yaml"
MANIFEST_FILE_NAME: Final[str] = "manifest.yaml"

# =============================================================================
# LOGGING
# =============================================================================
LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
