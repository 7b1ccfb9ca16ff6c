"""CLI entry point for photosearch.

This module provides the command-line interface, which doubles as the
administrative surface for the access key.

Commands:
    init: Create configuration file interactively
    set-key: Store the Unsplash access key (saveAccessKey resolver)
    key-status: Report whether the access key is set (isAccessKeySet resolver)
    search: Run the search-photos action once
    serve: Start the MCP server (default)

Example:
    photosearch init
    photosearch set-key
    photosearch search "mountain lake" --orientation landscape
    photosearch serve
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

import click

from photosearch import __version__
from photosearch.constants import (
    ACTION_SEARCH_PHOTOS,
    CONFIG_FILE_NAME,
    DEFAULT_SECRETS_DB_PATH,
    RESOLVER_IS_ACCESS_KEY_SET,
    RESOLVER_SAVE_ACCESS_KEY,
    UNSPLASH_DEVELOPERS_URL,
)
from photosearch.logging import LogContext, setup_logging


def _success(msg: str) -> str:
    """Format success message with green checkmark."""
    return click.style("✓", fg="green") + " " + msg


def _error(msg: str) -> str:
    """Format error message with red X."""
    return click.style("✗", fg="red") + " " + msg


def _info(msg: str) -> str:
    """Format info message with blue arrow."""
    return click.style("→", fg="blue") + " " + msg


async def _invoke_resolver(name: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    """Open the configured secret store, run one resolver and close the store."""
    from photosearch.config import load_config
    from photosearch.resolvers import create_admin_resolver
    from photosearch.secret_store import create_secret_store

    config = load_config()
    store = create_secret_store(config.secrets)
    await store.initialize()
    try:
        return await create_admin_resolver(store).invoke(name, payload)
    finally:
        await store.close()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="photosearch")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """photosearch - Unsplash photo search for conversational agents.

    Serves the search-photos action over MCP and manages the Unsplash
    access key it needs.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@cli.command()
def init() -> None:
    """Create .photosearch.yaml configuration interactively."""
    config_path = Path(CONFIG_FILE_NAME)

    if config_path.exists():
        click.echo(f"Config file already exists: {config_path}")
        if not click.confirm("Overwrite?", default=False):
            click.echo("Aborted.")
            return

    click.echo()
    click.echo(click.style("photosearch Setup", bold=True))
    click.echo()

    backend = click.prompt(
        "Secret store backend",
        type=click.Choice(["sqlite", "memory"]),
        default="sqlite",
    )
    db_path = DEFAULT_SECRETS_DB_PATH
    if backend == "sqlite":
        db_path = click.prompt("  Secrets database path", default=DEFAULT_SECRETS_DB_PATH)

    config_lines = [
        "# photosearch configuration",
        "",
        "unsplash:",
        "  per_page: 10",
        "  timeout_seconds: 30",
        "",
        "secrets:",
        f'  backend: "{backend}"',
        f'  db_path: "{db_path}"',
        "",
    ]
    config_path.write_text("\n".join(config_lines))

    click.echo()
    click.echo(_success(f"Created {config_path}"))
    click.echo()
    click.echo(click.style("Next steps:", bold=True))
    click.echo(f"  Get an access key from {UNSPLASH_DEVELOPERS_URL}")
    click.echo("  photosearch set-key")
    click.echo('  photosearch search "mountain lake"')


@cli.command("set-key")
@click.option(
    "--access-key",
    prompt="Unsplash access key",
    hide_input=True,
    help="Unsplash access key (prompted without echo when omitted)",
)
def set_key(access_key: str) -> None:
    """Store the Unsplash access key in the secret store."""
    result = asyncio.run(_invoke_resolver(RESOLVER_SAVE_ACCESS_KEY, {"accessKey": access_key}))

    if result.get("success"):
        click.echo(_success(result.get("message", "Access key saved")))
    else:
        click.echo(_error(result.get("error", "Failed to save access key")), err=True)
        sys.exit(1)


@cli.command("key-status")
def key_status() -> None:
    """Show whether the Unsplash access key is configured."""
    result = asyncio.run(_invoke_resolver(RESOLVER_IS_ACCESS_KEY_SET))

    if result.get("error"):
        click.echo(_error(result["error"]), err=True)
        sys.exit(1)

    if result.get("isSet"):
        click.echo(_success("Access key is set"))
    else:
        click.echo(_info("Access key is not set. Run 'photosearch set-key'."))


@cli.command()
@click.argument("query")
@click.option("--color", default=None, help="Dominant color filter (e.g. blue, black_and_white)")
@click.option(
    "--orientation",
    type=click.Choice(["landscape", "portrait", "squarish"]),
    default=None,
    help="Orientation filter",
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw action response")
def search(query: str, color: str | None, orientation: str | None, as_json: bool) -> None:
    """Run the search-photos action once and print the results."""
    from photosearch.actions import PhotoSearchAction
    from photosearch.config import load_config
    from photosearch.secret_store import create_secret_store
    from photosearch.unsplash import UnsplashClient

    async def run_search() -> Any:
        config = load_config()
        store = create_secret_store(config.secrets)
        client = UnsplashClient(config.unsplash)
        await store.initialize()
        try:
            action = PhotoSearchAction(store, client)
            return await action.search(
                {"query": query, "color": color, "orientation": orientation}
            )
        finally:
            await client.close()
            await store.close()

    with LogContext(action=ACTION_SEARCH_PHOTOS):
        response = asyncio.run(run_search())

    if as_json:
        click.echo(response.model_dump_json(indent=2))
        if response.status == "error":
            sys.exit(1)
        return

    if response.status == "error":
        click.echo(_error(response.error), err=True)
        sys.exit(1)

    click.echo(_success(response.message))
    for photo in response.results:
        click.echo()
        click.echo(click.style(photo.description, bold=True))
        if photo.url:
            click.echo(f"  {photo.url}")
        click.echo(f"  Photo by {photo.photographer or 'unknown'} ({photo.photographer_url or '-'})")


@cli.command()
def serve() -> None:
    """Start the MCP server (stdio transport).

    \b
    Connect an MCP client:
        claude mcp add photosearch -- photosearch serve
    """
    # stdout carries the MCP protocol
    click.echo(click.style("photosearch", bold=True) + " MCP server running", err=True)
    click.echo(f"Tools: {ACTION_SEARCH_PHOTOS}", err=True)
    click.echo(err=True)

    from photosearch.server import main as server_main

    server_main()


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
