"""Workspace member directory."""
import logging
from typing import Optional

from .client import ClickUpClient
from .errors import TeamNotFoundError
from .payload import items_of

logger = logging.getLogger("clickup-mcp.members")


def _member_field(member: dict, field: str) -> Optional[str]:
    value = member.get(field)
    if value is None:
        value = (member.get("user") or {}).get(field)
    return value


async def fetch_members(client: ClickUpClient, team_id: str) -> dict:
    """Return the roster of one team visible to the configured token.

    ClickUp only lists all authorized teams, so the matching one is picked
    out locally by string-compared id.
    """
    data = await client.call("GET", "/team")
    for team in items_of(data, "teams"):
        if str(team.get("id")) == str(team_id):
            members = team.get("members") or []
            logger.info(f"Successfully retrieved {len(members)} members for team {team_id}")
            return {
                "team_id": team_id,
                "name": team.get("name"),
                "members": members,
                "guests": team.get("guests") or [],
            }
    raise TeamNotFoundError(team_id)


async def find_member_by_name(client: ClickUpClient, team_id: str, query: str) -> dict:
    """Find members whose username or email contains ``query``, ignoring case."""
    roster = await fetch_members(client, team_id)
    needle = query.lower()
    matches = [
        member for member in roster["members"]
        if any(needle in str(_member_field(member, field) or "").lower() for field in ("username", "email"))
    ]
    return {"team_id": team_id, "matches": matches}
