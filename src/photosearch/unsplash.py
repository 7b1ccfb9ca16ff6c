"""Unsplash API client.

Wraps the one endpoint the search action needs, ``GET /search/photos``.
The access key travels as the ``client_id`` query parameter.

Example:
    client = UnsplashClient(UnsplashConfig())
    data = await client.search_photos(access_key, "mountain lake", orientation="landscape")
    await client.close()
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import httpx

from photosearch.constants import UNSPLASH_SEARCH_PATH
from photosearch.exceptions import UnsplashAPIError
from photosearch.logging import get_logger

if TYPE_CHECKING:
    from photosearch.models import UnsplashConfig

logger = get_logger(__name__)


class UnsplashClient:
    """Thin async client for the Unsplash search API.

    One request per call: no retries and no caching. Callers decide how to
    present errors.
    """

    def __init__(self, config: UnsplashConfig) -> None:
        self._config = config
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client.

        The client is created lazily and reused for all requests.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url.rstrip("/"),
                headers={"Accept": "application/json"},
                timeout=self._config.timeout_seconds,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_params(
        self,
        access_key: str,
        query: str,
        filters: dict[str, str] | None = None,
    ) -> dict[str, str]:
        """Assemble the query string for a search.

        Args:
            access_key: Unsplash access key.
            query: Search terms.
            filters: Optional filters; only the keys present are sent.

        Returns:
            Query parameters for ``/search/photos``.
        """
        params = {
            "query": query,
            "per_page": str(self._config.per_page),
            "client_id": access_key,
        }
        params.update(filters or {})
        return params

    async def search_photos(
        self,
        access_key: str,
        query: str,
        filters: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Run one photo search.

        Args:
            access_key: Unsplash access key.
            query: Search terms.
            filters: Optional ``color`` / ``orientation`` filters.

        Returns:
            The decoded JSON body.

        Raises:
            UnsplashAPIError: If the API answers with a non-success status.
            httpx.RequestError: On network failures.
            ValueError: If the body is not valid JSON.
        """
        start_time = time.monotonic()
        client = self._get_client()

        response = await client.get(
            UNSPLASH_SEARCH_PATH,
            params=self.build_params(access_key, query, filters),
        )
        duration_ms = int((time.monotonic() - start_time) * 1000)

        if not response.is_success:
            body = response.text
            logger.error(
                "Unsplash API error",
                extra={
                    "status_code": response.status_code,
                    "body": body,
                    "duration_ms": duration_ms,
                },
            )
            raise UnsplashAPIError(response.status_code, body)

        data: dict[str, Any] = response.json()

        logger.info(
            "Unsplash search completed",
            extra={
                "status_code": response.status_code,
                "total": data.get("total"),
                "duration_ms": duration_ms,
            },
        )

        return data
