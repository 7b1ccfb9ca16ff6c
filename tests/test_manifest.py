"""Tests for the agent manifest loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from photosearch.exceptions import ConfigError
from photosearch.manifest import BUNDLED_MANIFEST_PATH, load_manifest


class TestBundledManifest:
    """Tests against the manifest shipped with the package."""

    def test_loads(self) -> None:
        """Test that the bundled manifest validates."""
        manifest = load_manifest()

        assert manifest.agent.key == "photo-search-agent"
        assert manifest.agent.prompt
        assert manifest.agent.conversation_starters

    def test_agent_references_search_action(self) -> None:
        """Test that the agent can call search-photos."""
        manifest = load_manifest()

        actions = manifest.agent_actions()

        assert [action.key for action in actions] == ["search-photos"]
        assert actions[0].function == "searchPhotos"
        assert actions[0].action_verb == "GET"

    def test_search_input_schema(self) -> None:
        """Test the JSON Schema derived from the action inputs."""
        action = load_manifest().get_action("search-photos")
        assert action is not None

        schema = action.input_schema()

        assert schema["type"] == "object"
        assert set(schema["properties"]) == {"query", "color", "orientation"}
        assert schema["required"] == ["query"]
        assert schema["properties"]["query"]["type"] == "string"
        assert schema["properties"]["orientation"]["enum"] == ["landscape", "portrait", "squarish"]
        assert "enum" not in schema["properties"]["query"]

    def test_bundled_path_is_inside_package(self) -> None:
        """Test that the bundled manifest sits next to the module."""
        assert BUNDLED_MANIFEST_PATH.name == "manifest.yaml"
        assert BUNDLED_MANIFEST_PATH.exists()


class TestManifestErrors:
    """Tests for invalid manifests."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing override raises ConfigError."""
        with pytest.raises(ConfigError):
            load_manifest(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test that broken YAML raises ConfigError."""
        path = tmp_path / "manifest.yaml"
        path.write_text("agent: [unclosed\n")

        with pytest.raises(ConfigError):
            load_manifest(path)

    def test_missing_agent_prompt(self, tmp_path: Path) -> None:
        """Test that schema violations raise ConfigError."""
        path = tmp_path / "manifest.yaml"
        path.write_text("agent:\n  key: a\n  name: A\n")

        with pytest.raises(ConfigError):
            load_manifest(path)

    def test_undeclared_action_reference(self, tmp_path: Path) -> None:
        """Test that the agent may only reference declared actions."""
        path = tmp_path / "manifest.yaml"
        path.write_text(
            "agent:\n"
            "  key: a\n"
            "  name: A\n"
            "  prompt: Find photos.\n"
            "  actions:\n"
            "    - search-videos\n"
            "actions: []\n"
        )

        with pytest.raises(ConfigError) as exc_info:
            load_manifest(path)

        assert exc_info.value.details["missing"] == ["search-videos"]
