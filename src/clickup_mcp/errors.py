"""Gateway error taxonomy.

Every failure a tool invocation can produce is a ``GatewayError``. The
transport bindings convert these into their own failure representation using
``status_code`` and ``to_payload()``.
"""
from typing import Any, Optional


class GatewayError(Exception):
    """Base class for failures surfaced to the dispatch facade."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ToolValidationError(GatewayError):
    """Raised when a required tool input is missing or malformed."""


class UnknownToolError(GatewayError):
    """Raised when dispatch receives a name with no matching descriptor."""

    status_code = 404

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class MissingCredentialError(GatewayError):
    """Raised when no ClickUp API token is configured."""

    status_code = 500

    def __init__(self):
        super().__init__("Missing CLICKUP_API_TOKEN")


class UnresolvedTeamError(GatewayError):
    """Raised when neither an explicit team id nor a default is available."""

    def __init__(self):
        super().__init__("team_id or CLICKUP_TEAM_ID is required")


class TeamNotFoundError(GatewayError):
    """Raised when the credential in use has no access to the requested team."""

    status_code = 404

    def __init__(self, team_id: str):
        super().__init__(f"Team {team_id} not found for the configured token")
        self.team_id = team_id


class UpstreamError(GatewayError):
    """Raised when ClickUp responds with a non-success status or is unreachable.

    ``status`` is the remote HTTP status, or None for transport failures.
    """

    status_code = 502

    def __init__(self, message: str, status: Optional[int] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.status = status
