"""Gateway tool definitions and the tool registry.

This module provides the definitive list of tools exposed by both the MCP
(stdio) and HTTP transports, so the two bindings cannot drift apart. The
registry is built once at startup and never mutated.
"""
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional

from pydantic import BaseModel, ValidationError

from . import handlers, schemas
from .client import ClickUpClient
from .config import Settings
from .errors import ToolValidationError, UnknownToolError

logger = logging.getLogger("clickup-mcp.tools")

Handler = Callable[[Any, ClickUpClient, Settings], Awaitable[Any]]


@dataclass(frozen=True)
class ToolDescriptor:
    """Static metadata and handler for one tool."""

    name: str
    description: str
    input_schema: dict
    output_schema: dict
    input_model: type[BaseModel]
    handler: Handler

    def summary(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
            "outputSchema": self.output_schema,
        }


# ============================================================================
# Shared schema fragments
# ============================================================================

# ClickUp ids are strings, but agents often pass them as numbers
ID_TYPES = ["string", "integer"]

NAME_TYPES = ["string", "null"]

TEAM_ID_PROPERTY = {
    "type": ID_TYPES,
    "description": "Workspace (team) ID. Defaults to CLICKUP_TEAM_ID when omitted."
}

TASK_ID_PROPERTY = {
    "type": ID_TYPES,
    "description": "ClickUp task ID"
}

ASSIGNEES_PROPERTY = {
    "type": "array",
    "items": {"type": "integer"},
    "description": "ClickUp user IDs"
}

TASK_OUTPUT_SCHEMA = {
    "type": "object",
    "description": "ClickUp task object",
    "properties": {
        "id": {"type": "string"},
        "name": {"type": "string"},
        "status": {"type": "object"},
        "assignees": {"type": "array"},
        "url": {"type": "string"}
    }
}

LIST_NODE_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": ID_TYPES},
        "name": {"type": NAME_TYPES}
    }
}

MEMBERS_SCHEMA = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "user": {
                "type": "object",
                "properties": {
                    "id": {"type": ["integer", "string"]},
                    "username": {"type": ["string", "null"]},
                    "email": {"type": ["string", "null"]}
                }
            }
        }
    }
}


def _build_descriptors() -> list[ToolDescriptor]:
    """Get the list of all gateway tools."""
    return [
        # ============================================================================
        # Space / List Tools
        # ============================================================================
        ToolDescriptor(
            name="get_space",
            description="Get a ClickUp space by ID, including its statuses and enabled features.",
            input_schema={
                "type": "object",
                "properties": {
                    "space_id": {
                        "type": ID_TYPES,
                        "description": "ClickUp space ID"
                    }
                },
                "required": ["space_id"]
            },
            output_schema={
                "type": "object",
                "description": "ClickUp space object",
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "statuses": {"type": "array"}
                }
            },
            input_model=schemas.GetSpaceInput,
            handler=handlers.handle_get_space,
        ),
        ToolDescriptor(
            name="get_spaces_hierarchy",
            description="List a workspace's spaces with their folders and lists in one call. "
                       "Name filters are case-insensitive substrings. A folder is kept when its own "
                       "name matches folder_name or when any of its lists match list_name. "
                       "Spaces that miss space_name are skipped entirely. "
                       "Common pattern: get_spaces_hierarchy(list_name='sprint') → pick list_id → create_task().",
            input_schema={
                "type": "object",
                "properties": {
                    "team_id": TEAM_ID_PROPERTY,
                    "include_archived": {
                        "type": "boolean",
                        "description": "Include archived spaces, folders and lists (default: false)"
                    },
                    "space_name": {
                        "type": "string",
                        "description": "Only include spaces whose name contains this text"
                    },
                    "folder_name": {
                        "type": "string",
                        "description": "Only include folders whose name contains this text (or that contain matching lists)"
                    },
                    "list_name": {
                        "type": "string",
                        "description": "Only include lists whose name contains this text"
                    }
                }
            },
            output_schema={
                "type": "object",
                "properties": {
                    "team_id": {"type": "string"},
                    "spaces": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "id": {"type": ID_TYPES},
                                "name": {"type": NAME_TYPES},
                                "folders": {
                                    "type": "array",
                                    "items": {
                                        "type": "object",
                                        "properties": {
                                            "id": {"type": ID_TYPES},
                                            "name": {"type": NAME_TYPES},
                                            "lists": {"type": "array", "items": LIST_NODE_SCHEMA}
                                        }
                                    }
                                },
                                "lists": {"type": "array", "items": LIST_NODE_SCHEMA}
                            }
                        }
                    }
                },
                "required": ["team_id", "spaces"]
            },
            input_model=schemas.GetSpacesHierarchyInput,
            handler=handlers.handle_get_spaces_hierarchy,
        ),
        ToolDescriptor(
            name="get_list",
            description="Get a ClickUp list by ID.",
            input_schema={
                "type": "object",
                "properties": {
                    "list_id": {
                        "type": ID_TYPES,
                        "description": "ClickUp list ID"
                    }
                },
                "required": ["list_id"]
            },
            output_schema={
                "type": "object",
                "description": "ClickUp list object",
                "properties": {
                    "id": {"type": "string"},
                    "name": {"type": "string"},
                    "folder": {"type": "object"},
                    "space": {"type": "object"}
                }
            },
            input_model=schemas.GetListInput,
            handler=handlers.handle_get_list,
        ),
        # ============================================================================
        # Task Tools
        # ============================================================================
        ToolDescriptor(
            name="get_task",
            description="Get a ClickUp task by ID.",
            input_schema={
                "type": "object",
                "properties": {
                    "task_id": TASK_ID_PROPERTY
                },
                "required": ["task_id"]
            },
            output_schema=TASK_OUTPUT_SCHEMA,
            input_model=schemas.GetTaskInput,
            handler=handlers.handle_get_task,
        ),
        ToolDescriptor(
            name="create_task",
            description="Create a new task in a ClickUp list. "
                       "\n\nREQUIRED FIELDS:"
                       "\n• list_id: List to create the task in"
                       "\n• name: Task name"
                       "\n\nOPTIONAL FIELDS:"
                       "\n• description, status, assignees, due_date (ms timestamp), "
                       "priority (1 urgent - 4 low), tags, custom_fields"
                       "\n\nRETURNS: The created task",
            input_schema={
                "type": "object",
                "properties": {
                    "list_id": {
                        "type": ID_TYPES,
                        "description": "ClickUp list ID (required)"
                    },
                    "name": {
                        "type": "string",
                        "description": "Task name (required)"
                    },
                    "description": {
                        "type": "string",
                        "description": "Task description"
                    },
                    "status": {
                        "type": "string",
                        "description": "Status name as configured on the list"
                    },
                    "assignees": ASSIGNEES_PROPERTY,
                    "due_date": {
                        "type": "integer",
                        "description": "Due date as a Unix timestamp in milliseconds"
                    },
                    "priority": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 4,
                        "description": "1 urgent, 2 high, 3 normal, 4 low"
                    },
                    "tags": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Tag names"
                    },
                    "custom_fields": {
                        "type": "array",
                        "items": {"type": "object"},
                        "description": "Custom field values as [{id, value}]"
                    }
                },
                "required": ["list_id", "name"]
            },
            output_schema=TASK_OUTPUT_SCHEMA,
            input_model=schemas.CreateTaskInput,
            handler=handlers.handle_create_task,
        ),
        ToolDescriptor(
            name="update_task",
            description="Update a ClickUp task. Only the fields you provide are changed.",
            input_schema={
                "type": "object",
                "properties": {
                    "task_id": TASK_ID_PROPERTY,
                    "name": {"type": "string", "description": "New task name"},
                    "description": {"type": "string", "description": "New description"},
                    "status": {"type": "string", "description": "New status name"},
                    "priority": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 4,
                        "description": "1 urgent, 2 high, 3 normal, 4 low"
                    },
                    "due_date": {
                        "type": "integer",
                        "description": "Due date as a Unix timestamp in milliseconds"
                    },
                    "tags": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Tag names"
                    },
                    "custom_fields": {
                        "type": "array",
                        "items": {"type": "object"},
                        "description": "Custom field values as [{id, value}]"
                    },
                    "assignees": ASSIGNEES_PROPERTY,
                    "parent": {
                        "type": ID_TYPES,
                        "description": "Parent task ID (makes this task a subtask)"
                    }
                },
                "required": ["task_id"]
            },
            output_schema=TASK_OUTPUT_SCHEMA,
            input_model=schemas.UpdateTaskInput,
            handler=handlers.handle_update_task,
        ),
        ToolDescriptor(
            name="comment_task",
            description="Add a comment to a ClickUp task.",
            input_schema={
                "type": "object",
                "properties": {
                    "task_id": TASK_ID_PROPERTY,
                    "text": {
                        "type": "string",
                        "description": "Comment text"
                    }
                },
                "required": ["task_id", "text"]
            },
            output_schema={
                "type": "object",
                "properties": {
                    "id": {"type": ["string", "integer"]},
                    "hist_id": {"type": "string"},
                    "date": {"type": ["string", "integer"]}
                }
            },
            input_model=schemas.CommentTaskInput,
            handler=handlers.handle_comment_task,
        ),
        ToolDescriptor(
            name="get_task_comments",
            description="List the comments on a ClickUp task, newest first.",
            input_schema={
                "type": "object",
                "properties": {
                    "task_id": TASK_ID_PROPERTY
                },
                "required": ["task_id"]
            },
            output_schema={
                "type": "object",
                "properties": {
                    "comments": {"type": "array", "items": {"type": "object"}}
                }
            },
            input_model=schemas.GetTaskInput,
            handler=handlers.handle_get_task_comments,
        ),
        ToolDescriptor(
            name="change_status",
            description="Move a ClickUp task to another status.",
            input_schema={
                "type": "object",
                "properties": {
                    "task_id": TASK_ID_PROPERTY,
                    "status": {
                        "type": "string",
                        "description": "Target status name as configured on the list"
                    }
                },
                "required": ["task_id", "status"]
            },
            output_schema=TASK_OUTPUT_SCHEMA,
            input_model=schemas.ChangeStatusInput,
            handler=handlers.handle_change_status,
        ),
        ToolDescriptor(
            name="assign_user",
            description="Assign users to a ClickUp task. "
                       "Use find_member_by_name() to look up user IDs.",
            input_schema={
                "type": "object",
                "properties": {
                    "task_id": TASK_ID_PROPERTY,
                    "assignees": {**ASSIGNEES_PROPERTY, "minItems": 1}
                },
                "required": ["task_id", "assignees"]
            },
            output_schema=TASK_OUTPUT_SCHEMA,
            input_model=schemas.AssignUserInput,
            handler=handlers.handle_assign_user,
        ),
        ToolDescriptor(
            name="search_tasks",
            description="Search tasks across a workspace. Array filters match any of the given values.",
            input_schema={
                "type": "object",
                "properties": {
                    "team_id": TEAM_ID_PROPERTY,
                    "query": {"type": "string", "description": "Free-text search"},
                    "page": {"type": "integer", "minimum": 0, "description": "Page number, starting at 0"},
                    "order_by": {
                        "type": "string",
                        "description": "Sort field: id, created, updated or due_date"
                    },
                    "reverse": {"type": "boolean", "description": "Reverse the sort order"},
                    "include_closed": {"type": "boolean", "description": "Include closed tasks"},
                    "subtasks": {"type": "boolean", "description": "Include subtasks"},
                    "statuses": {"type": "array", "items": {"type": "string"}, "description": "Status names"},
                    "assignees": {"type": "array", "items": {"type": ID_TYPES}, "description": "Assignee user IDs"},
                    "tags": {"type": "array", "items": {"type": "string"}, "description": "Tag names"},
                    "list_ids": {"type": "array", "items": {"type": ID_TYPES}, "description": "List IDs"},
                    "space_ids": {"type": "array", "items": {"type": ID_TYPES}, "description": "Space IDs"}
                }
            },
            output_schema={
                "type": "object",
                "properties": {
                    "tasks": {"type": "array", "items": TASK_OUTPUT_SCHEMA}
                }
            },
            input_model=schemas.SearchTasksInput,
            handler=handlers.handle_search_tasks,
        ),
        # ============================================================================
        # Member Tools
        # ============================================================================
        ToolDescriptor(
            name="get_members",
            description="Get the members and guests of a workspace.",
            input_schema={
                "type": "object",
                "properties": {
                    "team_id": TEAM_ID_PROPERTY
                }
            },
            output_schema={
                "type": "object",
                "properties": {
                    "team_id": {"type": "string"},
                    "name": {"type": ["string", "null"]},
                    "members": MEMBERS_SCHEMA,
                    "guests": MEMBERS_SCHEMA
                },
                "required": ["team_id", "members", "guests"]
            },
            input_model=schemas.GetMembersInput,
            handler=handlers.handle_get_members,
        ),
        ToolDescriptor(
            name="find_member_by_name",
            description="Find workspace members whose username or email contains the query (case-insensitive). "
                       "Returns an empty match list when nobody matches.",
            input_schema={
                "type": "object",
                "properties": {
                    "team_id": TEAM_ID_PROPERTY,
                    "query": {
                        "type": "string",
                        "description": "Part of a username or email"
                    }
                },
                "required": ["query"]
            },
            output_schema={
                "type": "object",
                "properties": {
                    "team_id": {"type": "string"},
                    "matches": MEMBERS_SCHEMA
                },
                "required": ["team_id", "matches"]
            },
            input_model=schemas.FindMemberByNameInput,
            handler=handlers.handle_find_member_by_name,
        ),
    ]


def validation_message(error: ValidationError) -> str:
    """Describe the first validation failure, naming the offending field."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "input"
    if first["type"] in ("missing", "string_too_short"):
        return f"{field} is required"
    if first["type"] == "too_short":
        return f"{field} array is required"
    return f"{field}: {first['msg']}"


class ToolRegistry:
    """Fixed table of tool descriptors with name-based dispatch."""

    def __init__(self, descriptors: list[ToolDescriptor], client: ClickUpClient, settings: Settings):
        self._tools: Mapping[str, ToolDescriptor] = MappingProxyType({d.name: d for d in descriptors})
        self._client = client
        self._settings = settings

    def list(self) -> list[dict]:
        """Return tool summaries; handlers are never exposed."""
        return [descriptor.summary() for descriptor in self._tools.values()]

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    async def invoke(self, name: str, arguments: Optional[dict] = None) -> Any:
        """Validate ``arguments`` and run the named tool.

        Raises:
            UnknownToolError: No tool with this name
            ToolValidationError: Input does not satisfy the tool's input model
            GatewayError: Any failure raised by the handler
        """
        descriptor = self._tools.get(name)
        if descriptor is None:
            logger.warning(f"Unknown tool requested: {name}")
            raise UnknownToolError(name)

        try:
            params = descriptor.input_model.model_validate(arguments if arguments is not None else {})
        except ValidationError as e:
            raise ToolValidationError(validation_message(e)) from e

        return await descriptor.handler(params, self._client, self._settings)


def build_registry(settings: Settings, client: Optional[ClickUpClient] = None) -> ToolRegistry:
    """Build the registry once at startup."""
    return ToolRegistry(_build_descriptors(), client or ClickUpClient(settings), settings)
