"""ClickUp MCP gateway - expose ClickUp task management to AI agents.

This package provides a small, fixed set of tools backed by the ClickUp API,
served over MCP (stdio) or a minimal HTTP binding.

Modules:
- payload: Outbound body cleaning and query encoding
- client: Authenticated ClickUp API client
- hierarchy: Space/folder/list tree aggregation with name filters
- members: Workspace roster lookup
- schemas: Tool input models
- tools: Tool descriptors and the registry
- handlers: Tool implementation handlers
- server: stdio MCP server implementation
- api: HTTP binding
"""

__version__ = "1.0.0"

from . import formatters
from . import tools
from . import handlers

__all__ = ["formatters", "tools", "handlers", "__version__"]
