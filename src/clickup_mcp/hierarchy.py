"""Workspace hierarchy aggregation.

Builds a filtered space -> folder -> list tree for one workspace. Filters are
case-insensitive substrings applied per level; a match at a deeper level keeps
its ancestor, but never a sibling. Spaces rejected by the space filter are not
expanded, so a call costs ``1 + 2 * surviving spaces`` requests.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from .client import ClickUpClient
from .payload import items_of

logger = logging.getLogger("clickup-mcp.hierarchy")


@dataclass(frozen=True)
class HierarchyFilters:
    space_name: Optional[str] = None
    folder_name: Optional[str] = None
    list_name: Optional[str] = None


def name_matches(name: Optional[str], needle: Optional[str]) -> bool:
    """Case-insensitive substring match; an unset needle matches everything."""
    if not needle:
        return True
    return needle.lower() in str(name or "").lower()


def _list_node(lst: dict) -> dict:
    return {"id": lst.get("id"), "name": lst.get("name")}


def filter_lists(lists: list[dict], list_name: Optional[str]) -> list[dict]:
    return [_list_node(lst) for lst in lists if name_matches(lst.get("name"), list_name)]


def filter_folders(folders: list[dict], filters: HierarchyFilters) -> list[dict]:
    """Keep folders that match by name, or that still hold lists after filtering."""
    surviving = []
    for folder in folders:
        lists = filter_lists(folder.get("lists") or [], filters.list_name)
        if filters.folder_name and not name_matches(folder.get("name"), filters.folder_name) and not lists:
            continue
        surviving.append({"id": folder.get("id"), "name": folder.get("name"), "lists": lists})
    return surviving


async def fetch_spaces_with_hierarchy(
    client: ClickUpClient,
    team_id: str,
    include_archived: bool = False,
    filters: Optional[HierarchyFilters] = None,
) -> dict:
    """Fetch the team's spaces with their folders and lists, filtered by name.

    Spaces are expanded one at a time, in the order ClickUp lists them, and
    returned in that same order.
    """
    filters = filters or HierarchyFilters()
    archived = {"archived": include_archived}

    data = await client.call("GET", f"/team/{team_id}/space", query=archived)
    spaces = []
    for space in items_of(data, "spaces"):
        if not name_matches(space.get("name"), filters.space_name):
            continue

        space_id = space.get("id")
        folder_data = await client.call("GET", f"/space/{space_id}/folder", query=archived)
        list_data = await client.call("GET", f"/space/{space_id}/list", query=archived)

        spaces.append({
            "id": space_id,
            "name": space.get("name"),
            "folders": filter_folders(items_of(folder_data, "folders"), filters),
            "lists": filter_lists(items_of(list_data, "lists"), filters.list_name),
        })

    logger.info(f"Built hierarchy for team {team_id}: {len(spaces)} spaces")
    return {"team_id": team_id, "spaces": spaces}
