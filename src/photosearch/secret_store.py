"""Secret storage for the Unsplash access key.

The search action only reads the key; the administrative resolvers are the
only writers. There is no delete operation.

Backends:
    - MemorySecretStore: process-local dict, for tests and throwaway runs.
    - SqliteSecretStore: persistent store using aiosqlite.

Example:
    store = SqliteSecretStore(".photosearch/secrets.db")
    await store.initialize()

    await store.set_secret("unsplash-access-key", "abc123")
    key = await store.get_secret("unsplash-access-key")

    await store.close()
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite

from photosearch.exceptions import ConfigError, SecretStoreError
from photosearch.logging import get_logger

if TYPE_CHECKING:
    from photosearch.models import SecretsConfig

logger = get_logger(__name__)


class SecretStore(ABC):
    """Key-value store for secrets.

    Implementations return None for keys that were never set; absence is
    an expected state, not an error. Storage faults raise SecretStoreError.
    """

    async def initialize(self) -> None:
        """Prepare the backend. No-op unless the backend needs setup."""

    @abstractmethod
    async def get_secret(self, key: str) -> str | None:
        """Return the secret stored under ``key``, or None if unset."""
        ...

    @abstractmethod
    async def set_secret(self, key: str, value: str) -> None:
        """Create or replace the secret stored under ``key``."""
        ...

    async def close(self) -> None:
        """Release backend resources."""


class MemorySecretStore(SecretStore):
    """Secret store held in process memory."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._secrets: dict[str, str] = dict(initial or {})

    async def get_secret(self, key: str) -> str | None:
        return self._secrets.get(key)

    async def set_secret(self, key: str, value: str) -> None:
        self._secrets[key] = value
        logger.debug("Secret updated", extra={"secret_key": key})


class SqliteSecretStore(SecretStore):
    """SQLite-backed secret store.

    Schema:
        - key: TEXT PRIMARY KEY
        - value: TEXT
        - updated_at: TEXT (ISO timestamp)
    """

    def __init__(self, db_path: str) -> None:
        """Initialize storage with database path.

        Args:
            db_path: Path to SQLite database file.
        """
        self._db_path = Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise SecretStoreError("Secret store not initialized. Call initialize() first.")
        return self._conn

    async def initialize(self) -> None:
        """Create database and table if needed.

        Creates the parent directory if it doesn't exist.
        """
        if self._conn is not None:
            return

        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = await aiosqlite.connect(self._db_path)
            await self._conn.execute("""
                CREATE TABLE IF NOT EXISTS secrets (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            await self._conn.commit()
        except (OSError, sqlite3.Error) as e:
            raise SecretStoreError(
                "Failed to open secret store",
                details={"db_path": str(self._db_path), "error": str(e)},
            ) from e

        logger.info("Secret store initialized", extra={"db_path": str(self._db_path)})

    async def get_secret(self, key: str) -> str | None:
        conn = self._require_conn()

        try:
            cursor = await conn.execute("SELECT value FROM secrets WHERE key = ?", (key,))
            row = await cursor.fetchone()
        except sqlite3.Error as e:
            raise SecretStoreError("Failed to read secret", details={"error": str(e)}) from e

        if row is None:
            return None

        return str(row[0])

    async def set_secret(self, key: str, value: str) -> None:
        conn = self._require_conn()

        try:
            await conn.execute(
                "INSERT OR REPLACE INTO secrets (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, datetime.now(UTC).isoformat()),
            )
            await conn.commit()
        except sqlite3.Error as e:
            raise SecretStoreError("Failed to write secret", details={"error": str(e)}) from e

        logger.info("Secret updated", extra={"secret_key": key})

    async def close(self) -> None:
        """Close database connection."""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.debug("Secret store connection closed")


def create_secret_store(config: SecretsConfig) -> SecretStore:
    """Build the secret store selected by configuration.

    The returned store still needs ``await store.initialize()``.

    Args:
        config: Secrets section of the application config.

    Returns:
        An uninitialized SecretStore.

    Raises:
        ConfigError: If the backend name is unknown.
    """
    if config.backend == "sqlite":
        return SqliteSecretStore(config.db_path)
    if config.backend == "memory":
        return MemorySecretStore()
    raise ConfigError(f"Unknown secret store backend: {config.backend}")
