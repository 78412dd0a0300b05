"""Pydantic input models for the gateway tools.

Each tool's input is parsed into one of these models before its handler runs,
so a handler never sees a missing required field. Required string fields
reject the empty string. Numeric identifiers are accepted and coerced to
strings.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolInput(BaseModel):
    """Base schema for tool inputs."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, frozen=True)


class TeamScopedInput(ToolInput):
    """Inputs that fall back to the configured default team."""

    team_id: Optional[str] = Field(None, description="Workspace (team) ID; defaults to CLICKUP_TEAM_ID")


# Space / List Schemas

class GetSpaceInput(ToolInput):
    space_id: str = Field(..., min_length=1)


class GetSpacesHierarchyInput(TeamScopedInput):
    include_archived: bool = False
    space_name: Optional[str] = Field(None, description="Case-insensitive substring filter on space names")
    folder_name: Optional[str] = Field(None, description="Case-insensitive substring filter on folder names")
    list_name: Optional[str] = Field(None, description="Case-insensitive substring filter on list names")


class GetListInput(ToolInput):
    list_id: str = Field(..., min_length=1)


# Task Schemas

class GetTaskInput(ToolInput):
    task_id: str = Field(..., min_length=1)


class CreateTaskInput(ToolInput):
    """Schema for creating a task in a list.

    ``due_date`` is a Unix timestamp in milliseconds; ``priority`` is
    ClickUp's 1 (urgent) to 4 (low) scale.
    """

    list_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: Optional[str] = None
    assignees: Optional[list[int]] = None
    due_date: Optional[int] = None
    priority: Optional[int] = Field(None, ge=1, le=4)
    tags: Optional[list[str]] = None
    custom_fields: Optional[list[dict[str, Any]]] = None


class UpdateTaskInput(ToolInput):
    """Schema for updating a task. Only provided fields are sent."""

    task_id: str = Field(..., min_length=1)
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[int] = Field(None, ge=1, le=4)
    due_date: Optional[int] = None
    tags: Optional[list[str]] = None
    custom_fields: Optional[list[dict[str, Any]]] = None
    assignees: Optional[list[int]] = None
    parent: Optional[str] = None


class CommentTaskInput(ToolInput):
    task_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)


class ChangeStatusInput(ToolInput):
    task_id: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)


class AssignUserInput(ToolInput):
    task_id: str = Field(..., min_length=1)
    assignees: list[int] = Field(..., min_length=1)


class SearchTasksInput(TeamScopedInput):
    query: Optional[str] = None
    page: Optional[int] = Field(None, ge=0)
    order_by: Optional[str] = None
    reverse: Optional[bool] = None
    include_closed: Optional[bool] = None
    subtasks: Optional[bool] = None
    statuses: Optional[list[str]] = None
    assignees: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    list_ids: Optional[list[str]] = None
    space_ids: Optional[list[str]] = None


# Member Schemas

class GetMembersInput(TeamScopedInput):
    pass


class FindMemberByNameInput(TeamScopedInput):
    query: str = Field(..., min_length=1)
