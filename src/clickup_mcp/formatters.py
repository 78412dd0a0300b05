"""Shared formatting functions for gateway responses.

This module provides consistent text output for the MCP binding, which can
only carry error information as text.
"""
import json

from .errors import GatewayError


def format_details(details) -> str:
    """Format an error details payload for display."""
    if isinstance(details, dict) and set(details) == {"raw"}:
        return str(details["raw"])
    return json.dumps(details, indent=2, default=str)


def format_error(error: GatewayError) -> str:
    """Format a gateway error for display."""
    status_info = f" (HTTP {error.status})" if getattr(error, "status", None) else ""
    details_info = f"\nDetails:\n{format_details(error.details)}" if error.details is not None else ""
    return f"Error: {error.message}{status_info}{details_info}"
