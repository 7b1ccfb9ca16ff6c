"""Test helpers: raw Unsplash payloads and instrumented secret stores."""

from __future__ import annotations

from typing import Any

from photosearch.exceptions import SecretStoreError
from photosearch.secret_store import MemorySecretStore, SecretStore

TEST_ACCESS_KEY = "test-access-key"


def make_photo(photo_id: str = "abc123", **overrides: Any) -> dict[str, Any]:
    """Build one raw Unsplash search result entry."""
    photo: dict[str, Any] = {
        "id": photo_id,
        "description": "A calm mountain lake",
        "alt_description": "lake surrounded by mountains",
        "urls": {
            "regular": f"https://images.unsplash.com/photo-{photo_id}?w=1080",
            "thumb": f"https://images.unsplash.com/photo-{photo_id}?w=200",
        },
        "user": {
            "name": "Jane Doe",
            "links": {"html": "https://unsplash.com/@janedoe"},
        },
        "links": {
            "download_location": f"https://api.unsplash.com/photos/{photo_id}/download",
        },
    }
    photo.update(overrides)
    return photo


class RecordingSecretStore(MemorySecretStore):
    """Memory store that records every call."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.get_calls: list[str] = []
        self.set_calls: list[tuple[str, str]] = []

    async def get_secret(self, key: str) -> str | None:
        self.get_calls.append(key)
        return await super().get_secret(key)

    async def set_secret(self, key: str, value: str) -> None:
        self.set_calls.append((key, value))
        await super().set_secret(key, value)


class FailingSecretStore(SecretStore):
    """Store whose every operation fails."""

    async def get_secret(self, key: str) -> str | None:
        raise SecretStoreError("database is locked")

    async def set_secret(self, key: str, value: str) -> None:
        raise SecretStoreError("database is locked")
