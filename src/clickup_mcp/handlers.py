"""Tool implementation handlers.

All handlers follow a consistent pattern:
- Accept: a parsed input model, a ClickUpClient, and the gateway Settings
- Return: the JSON-compatible result for the caller
- Raise: GatewayError subclasses; nothing is caught or retried here
- Log successful operations for debugging

Input validation has already happened by the time a handler runs (see
``tools.ToolRegistry.invoke``).
"""
import logging
from typing import Any, Optional

from . import schemas
from .client import ClickUpClient
from .config import Settings
from .errors import UnresolvedTeamError
from .hierarchy import HierarchyFilters, fetch_spaces_with_hierarchy
from .members import fetch_members, find_member_by_name
from .payload import items_of

logger = logging.getLogger("clickup-mcp.handlers")


def resolve_team_id(team_id: Optional[str], settings: Settings) -> str:
    """Return the explicit team id, else the configured default."""
    resolved = team_id or settings.clickup_team_id
    if not resolved:
        raise UnresolvedTeamError()
    return resolved


# ============================================================================
# Space / List Handlers
# ============================================================================

async def handle_get_space(params: schemas.GetSpaceInput, client: ClickUpClient, settings: Settings) -> Any:
    result = await client.call("GET", f"/space/{params.space_id}")
    logger.info(f"Successfully retrieved space {params.space_id}")
    return result


async def handle_get_spaces_hierarchy(
    params: schemas.GetSpacesHierarchyInput,
    client: ClickUpClient,
    settings: Settings
) -> Any:
    """Return the team's spaces with nested folders and lists.

    Name filters cascade: a folder whose own name misses ``folder_name`` is
    still returned when one of its lists matches ``list_name``.
    """
    team_id = resolve_team_id(params.team_id, settings)
    filters = HierarchyFilters(
        space_name=params.space_name,
        folder_name=params.folder_name,
        list_name=params.list_name,
    )
    return await fetch_spaces_with_hierarchy(client, team_id, params.include_archived, filters)


async def handle_get_list(params: schemas.GetListInput, client: ClickUpClient, settings: Settings) -> Any:
    result = await client.call("GET", f"/list/{params.list_id}")
    logger.info(f"Successfully retrieved list {params.list_id}")
    return result


# ============================================================================
# Task Handlers
# ============================================================================

async def handle_get_task(params: schemas.GetTaskInput, client: ClickUpClient, settings: Settings) -> Any:
    result = await client.call("GET", f"/task/{params.task_id}")
    logger.info(f"Successfully retrieved task {params.task_id}")
    return result


async def handle_create_task(params: schemas.CreateTaskInput, client: ClickUpClient, settings: Settings) -> Any:
    """Create a task in a list. Absent optional fields are not sent."""
    payload = params.model_dump(exclude={"list_id"})
    result = await client.call("POST", f"/list/{params.list_id}/task", body=payload)
    task_id = result.get("id") if isinstance(result, dict) else None
    logger.info(f"Successfully created task in list {params.list_id}: {task_id}")
    return result


async def handle_update_task(params: schemas.UpdateTaskInput, client: ClickUpClient, settings: Settings) -> Any:
    payload = params.model_dump(exclude={"task_id"})
    result = await client.call("PUT", f"/task/{params.task_id}", body=payload)
    logger.info(f"Successfully updated task {params.task_id}")
    return result


async def handle_comment_task(params: schemas.CommentTaskInput, client: ClickUpClient, settings: Settings) -> Any:
    result = await client.call("POST", f"/task/{params.task_id}/comment", body={"comment_text": params.text})
    logger.info(f"Successfully commented on task {params.task_id}")
    return result


async def handle_get_task_comments(params: schemas.GetTaskInput, client: ClickUpClient, settings: Settings) -> Any:
    result = await client.call("GET", f"/task/{params.task_id}/comment")
    logger.info(f"Successfully listed {len(items_of(result, 'comments'))} comments for task {params.task_id}")
    return result


async def handle_change_status(params: schemas.ChangeStatusInput, client: ClickUpClient, settings: Settings) -> Any:
    result = await client.call("PUT", f"/task/{params.task_id}", body={"status": params.status})
    logger.info(f"Successfully moved task {params.task_id} to status '{params.status}'")
    return result


async def handle_assign_user(params: schemas.AssignUserInput, client: ClickUpClient, settings: Settings) -> Any:
    result = await client.call("PUT", f"/task/{params.task_id}", body={"assignees": params.assignees})
    logger.info(f"Successfully assigned {params.assignees} to task {params.task_id}")
    return result


async def handle_search_tasks(params: schemas.SearchTasksInput, client: ClickUpClient, settings: Settings) -> Any:
    """Search the team's tasks.

    Array filters use ClickUp's ``key[]`` convention, one query pair per value.
    """
    team_id = resolve_team_id(params.team_id, settings)
    query = {
        "query": params.query,
        "page": params.page,
        "order_by": params.order_by,
        "reverse": params.reverse,
        "include_closed": params.include_closed,
        "subtasks": params.subtasks,
        "statuses[]": params.statuses,
        "assignees[]": params.assignees,
        "tags[]": params.tags,
        "list_ids[]": params.list_ids,
        "space_ids[]": params.space_ids,
    }
    result = await client.call("GET", f"/team/{team_id}/task", query=query)
    logger.info(f"Successfully searched tasks in team {team_id}: {len(items_of(result, 'tasks'))} results")
    return result


# ============================================================================
# Member Handlers
# ============================================================================

async def handle_get_members(params: schemas.GetMembersInput, client: ClickUpClient, settings: Settings) -> Any:
    return await fetch_members(client, resolve_team_id(params.team_id, settings))


async def handle_find_member_by_name(
    params: schemas.FindMemberByNameInput,
    client: ClickUpClient,
    settings: Settings
) -> Any:
    team_id = resolve_team_id(params.team_id, settings)
    result = await find_member_by_name(client, team_id, params.query)
    logger.info(f"Found {len(result['matches'])} members matching '{params.query}' in team {team_id}")
    return result
