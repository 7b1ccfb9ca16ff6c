"""Administrative resolvers for the Unsplash access key.

Resolvers are named backend functions the admin surface (the CLI here)
calls with a JSON-like payload. Two are defined:

    - saveAccessKey: store a new access key
    - isAccessKeySet: report whether a key is configured, never its value

Both always return a payload dict; storage faults become ``success: false``
or ``isSet: false`` with a generic message.

Example:
    resolver = create_admin_resolver(secret_store)
    await resolver.invoke("saveAccessKey", {"accessKey": "abc123"})
    # {'success': True, 'message': 'Access key saved successfully'}
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from photosearch.constants import (
    ACCESS_KEY_SECRET_NAME,
    MSG_ACCESS_KEY_CHECK_FAILED,
    MSG_ACCESS_KEY_REQUIRED,
    MSG_ACCESS_KEY_SAVE_FAILED,
    MSG_ACCESS_KEY_SAVED,
    RESOLVER_IS_ACCESS_KEY_SET,
    RESOLVER_SAVE_ACCESS_KEY,
)
from photosearch.exceptions import ResolverNotFoundError
from photosearch.logging import get_logger
from photosearch.models import AccessKeyStatus, SaveAccessKeyRequest, SaveAccessKeyResult

if TYPE_CHECKING:
    from photosearch.secret_store import SecretStore

logger = get_logger(__name__)

ResolverHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class Resolver:
    """Registry of named resolver functions.

    Usage:
        resolver = Resolver()

        @resolver.define("ping")
        async def ping(payload: dict[str, Any]) -> dict[str, Any]:
            return {"pong": True}

        await resolver.invoke("ping")
    """

    def __init__(self) -> None:
        self._handlers: dict[str, ResolverHandler] = {}

    def define(self, name: str) -> Callable[[ResolverHandler], ResolverHandler]:
        """Register the decorated coroutine under ``name``.

        Redefining a name replaces the previous handler.
        """

        def decorator(handler: ResolverHandler) -> ResolverHandler:
            if name in self._handlers:
                logger.warning("Resolver redefined", extra={"resolver": name})
            self._handlers[name] = handler
            return handler

        return decorator

    def definitions(self) -> dict[str, ResolverHandler]:
        """Return a copy of the name-to-handler mapping."""
        return dict(self._handlers)

    async def invoke(self, name: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Call the resolver registered under ``name``.

        Raises:
            ResolverNotFoundError: If no resolver has that name.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise ResolverNotFoundError(name)

        logger.debug("Resolver invoked", extra={"resolver": name})
        return await handler(payload or {})


async def save_access_key(
    secret_store: SecretStore,
    payload: dict[str, Any],
) -> SaveAccessKeyResult:
    """Validate and store a new Unsplash access key.

    Empty or whitespace-only keys are rejected without touching the store.
    The stored value is the trimmed key.
    """
    try:
        request = SaveAccessKeyRequest.model_validate(payload)
    except ValidationError:
        return SaveAccessKeyResult(success=False, error=MSG_ACCESS_KEY_REQUIRED)

    access_key = (request.access_key or "").strip()
    if not access_key:
        return SaveAccessKeyResult(success=False, error=MSG_ACCESS_KEY_REQUIRED)

    try:
        await secret_store.set_secret(ACCESS_KEY_SECRET_NAME, access_key)
    except Exception as e:
        logger.exception("Error saving access key", extra={"error": str(e)})
        return SaveAccessKeyResult(success=False, error=MSG_ACCESS_KEY_SAVE_FAILED)

    logger.info("Access key saved successfully")
    return SaveAccessKeyResult(success=True, message=MSG_ACCESS_KEY_SAVED)


async def is_access_key_set(secret_store: SecretStore) -> AccessKeyStatus:
    """Report whether an access key is stored."""
    try:
        access_key = await secret_store.get_secret(ACCESS_KEY_SECRET_NAME)
    except Exception as e:
        logger.exception("Error checking access key", extra={"error": str(e)})
        return AccessKeyStatus(is_set=False, error=MSG_ACCESS_KEY_CHECK_FAILED)

    return AccessKeyStatus(is_set=bool(access_key))


def create_admin_resolver(secret_store: SecretStore) -> Resolver:
    """Build a Resolver with saveAccessKey and isAccessKeySet bound to a store."""
    resolver = Resolver()

    @resolver.define(RESOLVER_SAVE_ACCESS_KEY)
    async def _save(payload: dict[str, Any]) -> dict[str, Any]:
        result = await save_access_key(secret_store, payload)
        return result.to_payload()

    @resolver.define(RESOLVER_IS_ACCESS_KEY_SET)
    async def _status(payload: dict[str, Any]) -> dict[str, Any]:
        status = await is_access_key_set(secret_store)
        return status.to_payload()

    return resolver
