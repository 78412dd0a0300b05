"""Shared fixtures for gateway tests."""
import pytest

from clickup_mcp.config import Settings


class FakeClickUp:
    """Stand-in for ClickUpClient that replays canned responses by (method, path).

    Every call is recorded so tests can assert on the exact request sequence.
    A canned response that is an exception instance is raised instead.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    async def call(self, method, path, body=None, query=None):
        self.calls.append((method, path, body, query))
        response = self.responses[(method, path)]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def paths(self):
        return [path for _, path, _, _ in self.calls]


@pytest.fixture
def settings():
    return Settings(clickup_api_token="pk_test_token", clickup_team_id="9001")


@pytest.fixture
def fake_client():
    def _make(responses=None):
        return FakeClickUp(responses)
    return _make
