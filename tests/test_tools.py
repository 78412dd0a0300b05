"""Tests for the tool registry, input validation and handlers."""
import pytest

from clickup_mcp.config import Settings
from clickup_mcp.errors import (
    TeamNotFoundError,
    ToolValidationError,
    UnknownToolError,
    UnresolvedTeamError,
)
from clickup_mcp.tools import ToolRegistry, build_registry

EXPECTED_TOOLS = [
    "get_space",
    "get_spaces_hierarchy",
    "get_list",
    "get_task",
    "create_task",
    "update_task",
    "comment_task",
    "get_task_comments",
    "change_status",
    "assign_user",
    "search_tasks",
    "get_members",
    "find_member_by_name",
]


@pytest.fixture
def make_registry(settings, fake_client):
    def _make(responses=None, settings_override=None):
        client = fake_client(responses)
        return build_registry(settings_override or settings, client), client
    return _make


class TestToolListing:
    """Test the published tool table."""

    def test_lists_every_tool_in_order(self, make_registry):
        registry, _ = make_registry()
        assert [tool["name"] for tool in registry.list()] == EXPECTED_TOOLS

    def test_summaries_hide_handlers(self, make_registry):
        registry, _ = make_registry()
        for tool in registry.list():
            assert set(tool) == {"name", "description", "inputSchema", "outputSchema"}
            assert tool["inputSchema"]["type"] == "object"
            assert tool["outputSchema"]["type"] == "object"

    def test_published_required_fields_match_input_models(self, make_registry):
        """The hand-written JSON schemas agree with the pydantic models."""
        registry, _ = make_registry()
        for name in EXPECTED_TOOLS:
            descriptor = registry.get(name)
            model_schema = descriptor.input_model.model_json_schema()
            assert sorted(descriptor.input_schema.get("required", [])) == sorted(model_schema.get("required", [])), name
            assert set(descriptor.input_schema["properties"]) == set(model_schema["properties"]), name

    def test_table_is_read_only(self, make_registry):
        registry, _ = make_registry()
        with pytest.raises(TypeError):
            registry._tools["new_tool"] = registry.get("get_task")


class TestDispatch:
    """Test name-based dispatch and validation before network work."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, make_registry):
        registry, client = make_registry()

        with pytest.raises(UnknownToolError) as exc_info:
            await registry.invoke("nonexistent_tool", {})

        assert exc_info.value.message == "Unknown tool: nonexistent_tool"
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_create_task_missing_fields(self, make_registry):
        registry, client = make_registry()

        with pytest.raises(ToolValidationError) as exc_info:
            await registry.invoke("create_task", {})

        assert exc_info.value.message == "list_id is required"
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_none_input_defaults_to_empty(self, make_registry):
        registry, client = make_registry()

        with pytest.raises(ToolValidationError) as exc_info:
            await registry.invoke("get_task", None)

        assert exc_info.value.message == "task_id is required"
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_empty_string_counts_as_missing(self, make_registry):
        registry, _ = make_registry()

        with pytest.raises(ToolValidationError) as exc_info:
            await registry.invoke("create_task", {"list_id": "9", "name": ""})

        assert exc_info.value.message == "name is required"

    @pytest.mark.asyncio
    async def test_empty_assignees_rejected(self, make_registry):
        registry, client = make_registry()

        with pytest.raises(ToolValidationError) as exc_info:
            await registry.invoke("assign_user", {"task_id": "t1", "assignees": []})

        assert exc_info.value.message == "assignees array is required"
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_malformed_field(self, make_registry):
        registry, _ = make_registry()

        with pytest.raises(ToolValidationError) as exc_info:
            await registry.invoke("create_task", {"list_id": "9", "name": "x", "priority": 9})

        assert exc_info.value.message.startswith("priority:")

    @pytest.mark.asyncio
    async def test_non_mapping_input(self, make_registry):
        registry, _ = make_registry()

        with pytest.raises(ToolValidationError) as exc_info:
            await registry.invoke("get_task", ["t1"])

        assert exc_info.value.message.startswith("input:")


class TestTaskHandlers:
    """Test translation of tool inputs into ClickUp requests."""

    @pytest.mark.asyncio
    async def test_get_task_numeric_id(self, make_registry):
        registry, client = make_registry({("GET", "/task/42"): {"id": "42"}})

        assert await registry.invoke("get_task", {"task_id": 42}) == {"id": "42"}
        assert client.calls == [("GET", "/task/42", None, None)]

    @pytest.mark.asyncio
    async def test_create_task_payload(self, make_registry):
        registry, client = make_registry({("POST", "/list/900/task"): {"id": "abc"}})

        result = await registry.invoke("create_task", {
            "list_id": "900",
            "name": "Write release notes",
            "due_date": 1767225600000,
            "priority": 2,
            "tags": ["docs"],
            "unknown_field": "ignored",
        })

        assert result == {"id": "abc"}
        method, path, body, query = client.calls[0]
        assert (method, path, query) == ("POST", "/list/900/task", None)
        assert body["name"] == "Write release notes"
        assert body["due_date"] == 1767225600000
        assert body["priority"] == 2
        assert body["tags"] == ["docs"]
        assert "list_id" not in body
        assert "unknown_field" not in body

    @pytest.mark.asyncio
    async def test_update_task_excludes_task_id(self, make_registry):
        registry, client = make_registry({("PUT", "/task/t1"): {"id": "t1"}})

        await registry.invoke("update_task", {"task_id": "t1", "parent": "t0", "status": "in review"})

        _, _, body, _ = client.calls[0]
        assert "task_id" not in body
        assert body["parent"] == "t0"
        assert body["status"] == "in review"

    @pytest.mark.asyncio
    async def test_comment_task(self, make_registry):
        registry, client = make_registry({("POST", "/task/t1/comment"): {"id": 77}})

        await registry.invoke("comment_task", {"task_id": "t1", "text": "Looks good"})

        assert client.calls == [("POST", "/task/t1/comment", {"comment_text": "Looks good"}, None)]

    @pytest.mark.asyncio
    async def test_get_task_comments(self, make_registry):
        registry, client = make_registry({("GET", "/task/t1/comment"): {"comments": [{"id": "1"}]}})

        assert await registry.invoke("get_task_comments", {"task_id": "t1"}) == {"comments": [{"id": "1"}]}

    @pytest.mark.asyncio
    async def test_change_status(self, make_registry):
        registry, client = make_registry({("PUT", "/task/t1"): {"id": "t1"}})

        await registry.invoke("change_status", {"task_id": "t1", "status": "complete"})

        assert client.calls == [("PUT", "/task/t1", {"status": "complete"}, None)]

    @pytest.mark.asyncio
    async def test_assign_user(self, make_registry):
        registry, client = make_registry({("PUT", "/task/t1"): {"id": "t1"}})

        await registry.invoke("assign_user", {"task_id": "t1", "assignees": [101, 102]})

        assert client.calls == [("PUT", "/task/t1", {"assignees": [101, 102]}, None)]

    @pytest.mark.asyncio
    async def test_create_task_with_non_object_response(self, make_registry):
        """An unexpected response shape is returned as-is once the task is created."""
        registry, client = make_registry({("POST", "/list/900/task"): ["created"]})

        result = await registry.invoke("create_task", {"list_id": "900", "name": "Ship"})

        assert result == ["created"]
        assert client.paths == ["/list/900/task"]

    @pytest.mark.asyncio
    async def test_search_and_comments_with_null_response(self, make_registry):
        registry, _ = make_registry({
            ("GET", "/team/9001/task"): None,
            ("GET", "/task/t1/comment"): None,
        })

        assert await registry.invoke("search_tasks", {}) is None
        assert await registry.invoke("get_task_comments", {"task_id": "t1"}) is None


class TestTeamScopedHandlers:
    """Test team id resolution for workspace-wide tools."""

    @pytest.mark.asyncio
    async def test_search_tasks_uses_default_team(self, make_registry):
        registry, client = make_registry({("GET", "/team/9001/task"): {"tasks": []}})

        await registry.invoke("search_tasks", {"query": "invoice", "statuses": ["open", "review"], "reverse": False})

        method, path, body, query = client.calls[0]
        assert (method, path, body) == ("GET", "/team/9001/task", None)
        assert query["query"] == "invoice"
        assert query["statuses[]"] == ["open", "review"]
        assert query["reverse"] is False
        assert query["page"] is None

    @pytest.mark.asyncio
    async def test_explicit_team_wins(self, make_registry):
        registry, client = make_registry({("GET", "/team/555/task"): {"tasks": []}})

        await registry.invoke("search_tasks", {"team_id": "555"})

        assert client.paths == ["/team/555/task"]

    @pytest.mark.asyncio
    async def test_unresolved_team(self, make_registry):
        registry, client = make_registry(settings_override=Settings(clickup_api_token="pk", clickup_team_id=None))

        with pytest.raises(UnresolvedTeamError) as exc_info:
            await registry.invoke("search_tasks", {})

        assert "team_id" in exc_info.value.message
        assert "CLICKUP_TEAM_ID" in exc_info.value.message
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_hierarchy_tool(self, make_registry):
        registry, client = make_registry({
            ("GET", "/team/9001/space"): {"spaces": [{"id": "s1", "name": "Eng"}, {"id": "s2", "name": "Sales"}]},
            ("GET", "/space/s1/folder"): {"folders": []},
            ("GET", "/space/s1/list"): {"lists": [{"id": "l1", "name": "Backlog"}]},
        })

        result = await registry.invoke("get_spaces_hierarchy", {"space_name": "eng"})

        assert result == {"team_id": "9001", "spaces": [
            {"id": "s1", "name": "Eng", "folders": [], "lists": [{"id": "l1", "name": "Backlog"}]}
        ]}
        assert "/space/s2/folder" not in client.paths

    @pytest.mark.asyncio
    async def test_find_member_by_name_tool(self, make_registry):
        registry, _ = make_registry({("GET", "/team"): {"teams": [
            {"id": "9001", "name": "Acme", "members": [{"user": {"username": "Anna"}}]},
        ]}})

        result = await registry.invoke("find_member_by_name", {"query": "ANN"})

        assert result == {"team_id": "9001", "matches": [{"user": {"username": "Anna"}}]}

    @pytest.mark.asyncio
    async def test_get_members_team_not_found(self, make_registry):
        registry, _ = make_registry({("GET", "/team"): {"teams": []}})

        with pytest.raises(TeamNotFoundError):
            await registry.invoke("get_members", {"team_id": "123"})


def test_registry_class_is_built_from_descriptors(settings, fake_client):
    registry = build_registry(settings, fake_client())
    assert isinstance(registry, ToolRegistry)
