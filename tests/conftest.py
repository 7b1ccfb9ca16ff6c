"""Shared fixtures for photosearch tests."""

from __future__ import annotations

import pytest

from helpers import TEST_ACCESS_KEY, RecordingSecretStore
from photosearch.actions import PhotoSearchAction
from photosearch.constants import ACCESS_KEY_SECRET_NAME
from photosearch.models import UnsplashConfig
from photosearch.unsplash import UnsplashClient


@pytest.fixture
def configured_store() -> RecordingSecretStore:
    """Secret store with an access key already saved."""
    return RecordingSecretStore({ACCESS_KEY_SECRET_NAME: TEST_ACCESS_KEY})


@pytest.fixture
def empty_store() -> RecordingSecretStore:
    """Secret store with no access key."""
    return RecordingSecretStore()


@pytest.fixture
async def unsplash_client() -> UnsplashClient:
    """Unsplash client with default configuration."""
    client = UnsplashClient(UnsplashConfig())
    yield client
    await client.close()


@pytest.fixture
def action(
    configured_store: RecordingSecretStore, unsplash_client: UnsplashClient
) -> PhotoSearchAction:
    """Search action with a configured access key."""
    return PhotoSearchAction(configured_store, unsplash_client)
