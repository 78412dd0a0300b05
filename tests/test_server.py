"""Tests for the MCP binding and error formatting."""
import pytest
from mcp.types import CallToolRequest, CallToolRequestParams, ListToolsRequest

from clickup_mcp.errors import MissingCredentialError, UpstreamError
from clickup_mcp.formatters import format_error
from clickup_mcp.server import create_server
from clickup_mcp.tools import build_registry


@pytest.fixture
def make_server(settings, fake_client):
    def _make(responses=None):
        client = fake_client(responses)
        return create_server(build_registry(settings, client)), client
    return _make


async def call(app, name, arguments):
    """Dispatch a tools/call request the way the stdio transport does."""
    request = CallToolRequest(method="tools/call", params=CallToolRequestParams(name=name, arguments=arguments))
    result = await app.request_handlers[CallToolRequest](request)
    return result.root


class TestMcpServer:
    """Test the stdio MCP server wiring."""

    @pytest.mark.asyncio
    async def test_list_tools_exposes_schemas(self, settings, fake_client):
        registry = build_registry(settings, fake_client())
        app = create_server(registry)

        result = await app.request_handlers[ListToolsRequest](ListToolsRequest(method="tools/list"))

        tools = {tool.name: tool for tool in result.root.tools}
        assert list(tools) == [summary["name"] for summary in registry.list()]
        assert tools["create_task"].inputSchema["required"] == ["list_id", "name"]
        assert tools["get_spaces_hierarchy"].outputSchema["required"] == ["team_id", "spaces"]


class TestMcpCallTool:
    """Test tools/call delegation to the registry."""

    @pytest.mark.asyncio
    async def test_success_returns_structured_result(self, make_server):
        app, client = make_server({("GET", "/task/t1"): {"id": "t1", "name": "Demo"}})

        result = await call(app, "get_task", {"task_id": "t1"})

        assert not result.isError
        assert result.structuredContent == {"id": "t1", "name": "Demo"}
        assert client.paths == ["/task/t1"]

    @pytest.mark.asyncio
    async def test_numeric_id_accepted(self, make_server):
        """Numeric ids pass schema validation and are coerced by the input model."""
        app, client = make_server({("GET", "/task/42"): {"id": "42"}})

        result = await call(app, "get_task", {"task_id": 42})

        assert not result.isError
        assert client.paths == ["/task/42"]

    @pytest.mark.asyncio
    async def test_hierarchy_with_numeric_upstream_ids(self, make_server):
        app, _ = make_server({
            ("GET", "/team/9001/space"): {"spaces": [{"id": 1, "name": "Eng"}]},
            ("GET", "/space/1/folder"): {"folders": [{"id": 2, "name": "Misc", "lists": [{"id": 3, "name": None}]}]},
            ("GET", "/space/1/list"): {"lists": [{"id": 7, "name": "Backlog"}]},
        })

        result = await call(app, "get_spaces_hierarchy", {})

        assert not result.isError
        space = result.structuredContent["spaces"][0]
        assert space["folders"][0]["lists"] == [{"id": 3, "name": None}]
        assert space["lists"] == [{"id": 7, "name": "Backlog"}]

    @pytest.mark.asyncio
    async def test_unknown_tool_is_error_result(self, make_server):
        app, client = make_server()

        result = await call(app, "nonexistent_tool", {})

        assert result.isError
        assert result.content[0].text == "Error: Unknown tool: nonexistent_tool"
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_upstream_error_renders_details(self, make_server):
        app, _ = make_server({
            ("GET", "/task/gone"): UpstreamError("ClickUp 404", status=404, details={"err": "Task not found"}),
        })

        result = await call(app, "get_task", {"task_id": "gone"})

        assert result.isError
        text = result.content[0].text
        assert text.startswith("Error: ClickUp 404 (HTTP 404)")
        assert '"err": "Task not found"' in text


class TestFormatError:
    """Test text rendering of gateway errors."""

    def test_upstream_error_with_details(self):
        error = UpstreamError("ClickUp 404", status=404, details={"err": "Task not found"})

        text = format_error(error)

        assert text.startswith("Error: ClickUp 404 (HTTP 404)")
        assert '"err": "Task not found"' in text

    def test_raw_details_rendered_as_text(self):
        error = UpstreamError("ClickUp 500", status=500, details={"raw": "<html>down</html>"})

        assert format_error(error).endswith("Details:\n<html>down</html>")

    def test_error_without_details(self):
        assert format_error(MissingCredentialError()) == "Error: Missing CLICKUP_API_TOKEN"
