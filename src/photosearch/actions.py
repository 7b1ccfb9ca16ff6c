"""The search-photos action called by the agent.

The agent's LLM decides when to call this action and fills in the
parameters declared in the manifest. Every outcome, including failures,
comes back as a structured ActionResponse the agent can relay to the user:

    1. Not configured   - no access key in the secret store
    2. Invalid input    - no usable query string
    3. Unauthorized     - Unsplash answered 401
    4. Service error    - any other non-success status
    5. Unexpected fault - network, JSON or mapping errors

Status codes, response bodies and tracebacks are logged for operators and
never included in the response.

Example:
    action = PhotoSearchAction(secret_store, UnsplashClient(config.unsplash))
    response = await action.search({"query": "mountain lake", "orientation": "landscape"})
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from photosearch.constants import (
    ACCESS_KEY_SECRET_NAME,
    MSG_INVALID_ACCESS_KEY,
    MSG_NOT_CONFIGURED,
    MSG_QUERY_REQUIRED,
    MSG_SEARCH_FAILED,
    UNSPLASH_SERVICE_NAME,
)
from photosearch.exceptions import UnsplashAPIError
from photosearch.logging import get_logger
from photosearch.models import (
    ActionResponse,
    PhotoResult,
    SearchFailure,
    SearchRequest,
    SearchSuccess,
)

if TYPE_CHECKING:
    from photosearch.secret_store import SecretStore
    from photosearch.unsplash import UnsplashClient

logger = get_logger(__name__)


class PhotoSearchAction:
    """Searches Unsplash on behalf of the agent.

    Stateless between calls; the access key is re-read from the secret
    store on every search so an administrator's update takes effect at once.
    """

    def __init__(self, secret_store: SecretStore, client: UnsplashClient) -> None:
        self._secret_store = secret_store
        self._client = client

    async def search(self, request: SearchRequest | dict[str, Any]) -> ActionResponse:
        """Run one search and return a success or error response.

        Args:
            request: A SearchRequest or the raw parameters from the agent.

        Returns:
            SearchSuccess (possibly with zero results) or SearchFailure.
        """
        start_time = time.monotonic()

        try:
            access_key = await self._secret_store.get_secret(ACCESS_KEY_SECRET_NAME)
            if not access_key:
                logger.warning("Search attempted without a configured access key")
                return SearchFailure(error=MSG_NOT_CONFIGURED)

            if not isinstance(request, SearchRequest):
                try:
                    request = SearchRequest.model_validate(request)
                except ValidationError as e:
                    logger.warning("Invalid search parameters", extra={"error": str(e)})
                    return SearchFailure(error=MSG_QUERY_REQUIRED)

            query = (request.query or "").strip()
            if not query:
                return SearchFailure(error=MSG_QUERY_REQUIRED)

            filters = request.filters()
            logger.info("Searching photos", extra={"query": query, "filters": filters})

            try:
                data = await self._client.search_photos(access_key, query, filters)
            except UnsplashAPIError as e:
                if e.is_unauthorized:
                    return SearchFailure(error=MSG_INVALID_ACCESS_KEY)
                return SearchFailure(error=f"{UNSPLASH_SERVICE_NAME} API error: {e.status_code}")

            response = self._build_response(query, data)

            duration_ms = int((time.monotonic() - start_time) * 1000)
            logger.info(
                "Search completed",
                extra={
                    "query": query,
                    "total": response.total,
                    "returned": len(response.results),
                    "duration_ms": duration_ms,
                },
            )
            return response

        except Exception as e:
            logger.exception("Error searching photos", extra={"error": str(e)})
            return SearchFailure(error=MSG_SEARCH_FAILED)

    def _build_response(self, query: str, data: dict[str, Any]) -> SearchSuccess:
        """Map the API body into a SearchSuccess.

        An empty or missing ``results`` array is a valid zero-result search.
        """
        raw_results = data.get("results") or []

        if not raw_results:
            return SearchSuccess(
                total=0,
                results=[],
                message=f'No photos found for "{query}". Try different search terms.',
            )

        photos = [PhotoResult.from_unsplash(photo) for photo in raw_results]
        total = data.get("total")
        if total is None:
            total = len(photos)

        return SearchSuccess(
            total=total,
            results=photos,
            message=f'Found {total} photos for "{query}"',
        )
