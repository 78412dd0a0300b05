"""Tool listing and invocation endpoints."""
import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from ...tools import ToolRegistry

logger = logging.getLogger("clickup-mcp.api.tools")

router = APIRouter(tags=["tools"])


def get_registry(request: Request) -> ToolRegistry:
    return request.app.state.registry


async def read_tool_input(request: Request) -> Any:
    """Decode the request body into tool input.

    Accepts either ``{"input": {...}}`` or the input mapping itself. An empty
    body is an empty input.
    """
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    if isinstance(body, dict):
        return body["input"] if "input" in body else body
    return body


@router.get("")
def list_tools(registry: ToolRegistry = Depends(get_registry)):
    """List available tools with their input and output schemas."""
    return {"tools": registry.list()}


@router.post("/{tool_name}")
async def invoke_tool(
    tool_name: str,
    request: Request,
    registry: ToolRegistry = Depends(get_registry),
):
    """Invoke a tool by name.

    Failures are rendered as ``{"error": ..., "details": ...}`` by the
    application's exception handlers.
    """
    arguments = await read_tool_input(request)
    logger.info(f"Tool call: {tool_name}")
    result = await registry.invoke(tool_name, arguments)
    return {"result": result}
