"""ClickUp MCP Server - Expose ClickUp task management to AI assistants."""
import sys
import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool

from . import formatters
from .config import Settings, get_settings
from .errors import GatewayError
from .tools import ToolRegistry, build_registry


logger = logging.getLogger("clickup-mcp")


def create_server(registry: ToolRegistry) -> Server:
    """Create the MCP server bound to a tool registry."""
    app = Server("clickup-mcp")

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available gateway tools."""
        return [
            Tool(
                name=summary["name"],
                description=summary["description"],
                inputSchema=summary["inputSchema"],
                outputSchema=summary["outputSchema"],
            )
            for summary in registry.list()
        ]

    @app.call_tool()
    async def call_tool(name: str, arguments: Any) -> dict:
        """Handle MCP tool calls by delegating to the registry."""
        logger.info(f"Tool call: {name} with arguments: {arguments}")
        try:
            return await registry.invoke(name, arguments)
        except GatewayError as e:
            # The MCP server turns raised exceptions into error results
            logger.error(f"{type(e).__name__} during {name} call: {e.message}")
            if e.details is not None:
                logger.error(f"  Details: {e.details}")
            raise RuntimeError(formatters.format_error(e)) from e

    return app


def configure_logging(settings: Settings) -> None:
    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        force=True
    )


async def main():
    """Run the MCP server."""
    settings = get_settings()
    configure_logging(settings)
    logger.info(f"MCP Server starting with API base: {settings.clickup_api_base}")
    if not settings.clickup_api_token:
        logger.warning("CLICKUP_API_TOKEN is not set; every tool call will fail until it is configured")

    app = create_server(build_registry(settings))
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
