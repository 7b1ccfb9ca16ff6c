"""Loader for the agent manifest.

The manifest is the declarative half of the agent: its prompt, its
conversation starters and the actions it may call. A copy ships inside the
package; ``manifest_path`` in the config points at an override.

Example:
    manifest = load_manifest()
    for action in manifest.agent_actions():
        print(action.key, action.input_schema())
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from photosearch.config import read_yaml
from photosearch.constants import MANIFEST_FILE_NAME
from photosearch.exceptions import ConfigError
from photosearch.logging import get_logger
from photosearch.models import AgentManifest

logger = get_logger(__name__)

BUNDLED_MANIFEST_PATH = Path(__file__).with_name(MANIFEST_FILE_NAME)


def load_manifest(manifest_path: Path | None = None) -> AgentManifest:
    """Load and validate the agent manifest.

    Args:
        manifest_path: Manifest file to read. Defaults to the bundled one.

    Returns:
        The validated AgentManifest.

    Raises:
        ConfigError: If the file is missing or invalid, or the agent
            references an action the manifest does not declare.
    """
    path = manifest_path or BUNDLED_MANIFEST_PATH
    if not path.exists():
        raise ConfigError(f"Agent manifest not found: {path}")

    try:
        manifest = AgentManifest.model_validate(read_yaml(path))
    except ValidationError as e:
        raise ConfigError(
            f"Invalid agent manifest {path}",
            details={"errors": e.error_count()},
        ) from e

    declared = {action.key for action in manifest.actions}
    missing = [key for key in manifest.agent.actions if key not in declared]
    if missing:
        raise ConfigError(
            "Agent references undeclared actions",
            details={"missing": missing},
        )

    logger.debug(
        "Loaded agent manifest",
        extra={"path": str(path), "action_count": len(manifest.actions)},
    )
    return manifest
