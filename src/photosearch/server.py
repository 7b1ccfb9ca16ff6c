"""MCP server for photosearch.

This module stands in for the agent host: it reads the agent manifest and
exposes it over the Model Context Protocol.

    - Tools: one per manifest action (``search-photos``)
    - Prompts: the agent's system prompt and conversation starters

The server runs over stdio transport.

Example:
    Run as MCP server:
        photosearch serve
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    GetPromptResult,
    Prompt,
    PromptArgument,
    PromptMessage,
    TextContent,
    Tool,
)

from photosearch.actions import PhotoSearchAction
from photosearch.config import load_config
from photosearch.constants import MCP_SERVER_NAME
from photosearch.logging import LogContext, get_logger
from photosearch.manifest import load_manifest
from photosearch.models import AgentManifest, PhotoSearchConfig
from photosearch.secret_store import SecretStore, create_secret_store
from photosearch.unsplash import UnsplashClient

logger = get_logger(__name__)

ActionFunction = Callable[[dict[str, Any]], Awaitable[Any]]

server = Server(MCP_SERVER_NAME)


@dataclass
class Runtime:
    """Everything a tool call needs, built once per process."""

    config: PhotoSearchConfig
    manifest: AgentManifest
    secret_store: SecretStore
    client: UnsplashClient
    functions: dict[str, ActionFunction] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        config: PhotoSearchConfig,
        manifest: AgentManifest,
        secret_store: SecretStore,
        client: UnsplashClient,
    ) -> Runtime:
        """Wire the action functions the manifest refers to by name."""
        action = PhotoSearchAction(secret_store, client)
        return cls(
            config=config,
            manifest=manifest,
            secret_store=secret_store,
            client=client,
            functions={"searchPhotos": action.search},
        )

    async def close(self) -> None:
        await self.client.close()
        await self.secret_store.close()


_runtime: Runtime | None = None


async def get_runtime() -> Runtime:
    """Get or create the global Runtime.

    Loads configuration and the manifest, and opens the secret store, on
    first access.
    """
    global _runtime
    if _runtime is None:
        config = load_config()
        manifest_path = Path(config.manifest_path) if config.manifest_path else None
        manifest = load_manifest(manifest_path)

        secret_store = create_secret_store(config.secrets)
        await secret_store.initialize()

        _runtime = Runtime.create(config, manifest, secret_store, UnsplashClient(config.unsplash))
        logger.info("Runtime initialized", extra={"secret_backend": config.secrets.backend})
    return _runtime


def set_runtime(runtime: Runtime | None) -> None:
    """Replace the global Runtime (None resets it)."""
    global _runtime
    _runtime = runtime


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List one tool per action the agent may call."""
    runtime = await get_runtime()
    return [
        Tool(
            name=action.key,
            description=action.description.strip(),
            inputSchema=action.input_schema(),
        )
        for action in runtime.manifest.agent_actions()
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Run an action and return its response as JSON text.

    Only actions the agent lists are callable. Every record logged during
    the call carries a ``tool`` field.

    Args:
        name: The action key.
        arguments: Parameters chosen by the agent.

    Returns:
        List containing a single TextContent with the JSON response.
    """
    with LogContext(tool=name):
        start_time = time.monotonic()

        logger.info("Tool call received")

        try:
            runtime = await get_runtime()
            action = next(
                (item for item in runtime.manifest.agent_actions() if item.key == name), None
            )
            function = runtime.functions.get(action.function) if action is not None else None
            if function is None:
                logger.warning("Unknown tool called")
                return [TextContent(type="text", text=f"Error: Unknown tool '{name}'")]

            response = await function(arguments or {})

        except Exception as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            logger.exception(
                "Tool call failed",
                extra={"error": str(e), "duration_ms": duration_ms},
            )
            return [
                TextContent(
                    type="text",
                    text=f"Error: An unexpected error occurred while processing '{name}'",
                )
            ]

        duration_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(
            "Tool call completed",
            extra={"status": response.status, "duration_ms": duration_ms},
        )

        return [TextContent(type="text", text=response.model_dump_json())]


@server.list_prompts()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_prompts() -> list[Prompt]:
    """Expose the agent prompt, with its conversation starters as hints."""
    agent = (await get_runtime()).manifest.agent
    starters = "; ".join(agent.conversation_starters)
    description = agent.description
    if starters:
        description = f"{description} Try: {starters}"

    return [
        Prompt(
            name=agent.key,
            description=description,
            arguments=[
                PromptArgument(
                    name="request",
                    description="What the user is looking for",
                    required=False,
                )
            ],
        )
    ]


@server.get_prompt()  # type: ignore[no-untyped-call, untyped-decorator]
async def get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
    """Render the agent prompt, optionally followed by the user's request."""
    agent = (await get_runtime()).manifest.agent
    if name != agent.key:
        raise ValueError(f"Unknown prompt: {name}")

    messages = [PromptMessage(role="user", content=TextContent(type="text", text=agent.prompt))]

    request = (arguments or {}).get("request")
    if request:
        messages.append(PromptMessage(role="user", content=TextContent(type="text", text=request)))

    return GetPromptResult(description=agent.name, messages=messages)


async def run_server() -> None:
    """Run the MCP server over stdio transport until interrupted."""
    logger.info("Starting MCP server")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        if _runtime is not None:
            await _runtime.close()


def main() -> None:
    """Entry point for the MCP server."""
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
