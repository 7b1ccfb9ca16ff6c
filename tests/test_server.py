"""Tests for the MCP server handlers."""

from __future__ import annotations

import json
import logging

import pytest
from pytest_httpx import HTTPXMock

from helpers import TEST_ACCESS_KEY, RecordingSecretStore, make_photo
from photosearch import server
from photosearch.manifest import load_manifest
from photosearch.models import ActionDefinition, PhotoSearchConfig
from photosearch.unsplash import UnsplashClient


@pytest.fixture
async def runtime(configured_store: RecordingSecretStore) -> server.Runtime:
    """Install a Runtime backed by an in-memory secret store."""
    config = PhotoSearchConfig()
    runtime = server.Runtime.create(
        config,
        load_manifest(),
        configured_store,
        UnsplashClient(config.unsplash),
    )
    server.set_runtime(runtime)
    yield runtime
    await runtime.close()
    server.set_runtime(None)


class TestListTools:
    """Tests for tool listing."""

    async def test_lists_search_photos(self, runtime: server.Runtime) -> None:
        """Test that the manifest action is exposed as a tool."""
        tools = await server.list_tools()

        assert [tool.name for tool in tools] == ["search-photos"]
        assert tools[0].inputSchema["required"] == ["query"]
        assert tools[0].description


class TestCallTool:
    """Tests for tool dispatch."""

    async def test_search_returns_json_success(
        self, runtime: server.Runtime, httpx_mock: HTTPXMock
    ) -> None:
        """Test that search-photos runs the action and returns JSON."""
        httpx_mock.add_response(json={"total": 3, "results": [make_photo("p1")]})

        content = await server.call_tool("search-photos", {"query": "lake"})

        assert len(content) == 1
        payload = json.loads(content[0].text)
        assert payload["status"] == "success"
        assert payload["total"] == 3
        assert payload["results"][0]["id"] == "p1"
        assert payload["results"][0]["photographer_url"] == "https://unsplash.com/@janedoe"
        assert httpx_mock.get_request().url.params["client_id"] == TEST_ACCESS_KEY

    async def test_search_returns_json_error(
        self, runtime: server.Runtime, httpx_mock: HTTPXMock
    ) -> None:
        """Test that action failures come back as structured JSON."""
        httpx_mock.add_response(status_code=500, text="boom")

        content = await server.call_tool("search-photos", {"query": "lake"})

        payload = json.loads(content[0].text)
        assert payload == {"status": "error", "error": "Unsplash API error: 500"}

    async def test_missing_arguments(self, runtime: server.Runtime) -> None:
        """Test that an empty argument dict yields the query-required error."""
        content = await server.call_tool("search-photos", {})

        payload = json.loads(content[0].text)
        assert payload == {"status": "error", "error": "Search query is required"}

    async def test_unknown_tool(self, runtime: server.Runtime) -> None:
        """Test that unknown tools return an error message."""
        content = await server.call_tool("delete-photos", {})

        assert "Unknown tool" in content[0].text

    async def test_action_not_listed_by_agent_is_unknown(
        self, runtime: server.Runtime, httpx_mock: HTTPXMock
    ) -> None:
        """Test that a declared action the agent does not list cannot be called."""
        runtime.manifest.actions.append(
            ActionDefinition(
                key="hidden-search",
                name="Hidden search",
                function="searchPhotos",
                description="Not offered to the agent",
            )
        )

        content = await server.call_tool("hidden-search", {"query": "lake"})

        assert "Unknown tool" in content[0].text
        assert httpx_mock.get_requests() == []

    async def test_records_tagged_with_tool(
        self,
        runtime: server.Runtime,
        httpx_mock: HTTPXMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that every record logged during a call carries the tool name."""
        httpx_mock.add_response(json={"total": 0, "results": []})
        caplog.set_level(logging.INFO, logger="photosearch")
        factory = logging.getLogRecordFactory()

        await server.call_tool("search-photos", {"query": "lake"})

        records = [r for r in caplog.records if r.name.startswith("photosearch")]
        messages = {r.getMessage() for r in records}
        assert {"Tool call received", "Searching photos", "Tool call completed"} <= messages
        assert all(getattr(r, "tool", None) == "search-photos" for r in records)
        assert logging.getLogRecordFactory() is factory


class TestPrompts:
    """Tests for the agent prompt."""

    async def test_lists_agent_prompt(self, runtime: server.Runtime) -> None:
        """Test that the agent prompt is listed with starters in its description."""
        prompts = await server.list_prompts()

        assert [prompt.name for prompt in prompts] == ["photo-search-agent"]
        assert "mountain lake" in (prompts[0].description or "")

    async def test_get_prompt_with_request(self, runtime: server.Runtime) -> None:
        """Test rendering the prompt followed by the user's request."""
        result = await server.get_prompt("photo-search-agent", {"request": "red bicycles"})

        assert len(result.messages) == 2
        assert "Photo Finder" in result.messages[0].content.text
        assert result.messages[1].content.text == "red bicycles"

    async def test_get_prompt_without_request(self, runtime: server.Runtime) -> None:
        """Test rendering the prompt alone."""
        result = await server.get_prompt("photo-search-agent", None)

        assert len(result.messages) == 1

    async def test_get_unknown_prompt(self, runtime: server.Runtime) -> None:
        """Test that unknown prompt names raise."""
        with pytest.raises(ValueError):
            await server.get_prompt("other-agent", None)
