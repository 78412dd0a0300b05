"""Authenticated ClickUp API client.

One ``call`` issues exactly one HTTP request. Non-2xx responses and transport
failures are mapped into ``UpstreamError``; response bodies that are not JSON
are returned wrapped as ``{"raw": text}``.
"""
import json
import logging
from typing import Any, Mapping, Optional

import httpx

from .config import Settings
from .errors import MissingCredentialError, UpstreamError
from .payload import clean_payload, normalize_query

logger = logging.getLogger("clickup-mcp.client")


def parse_body(text: str) -> Any:
    """Parse a response body, falling back to a raw-text wrapper."""
    if not text:
        return {}
    try:
        return json.loads(text)
    except ValueError:
        return {"raw": text}


class ClickUpClient:
    """Issue authenticated requests against the ClickUp API.

    The settings are read-only for the lifetime of the client. ``transport``
    lets tests substitute an ``httpx.MockTransport``.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _headers(self, has_body: bool) -> dict:
        token = self.settings.clickup_api_token
        if not token:
            raise MissingCredentialError()
        headers = {"Authorization": token}
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def call(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Call ClickUp and return the parsed response body.

        Raises:
            MissingCredentialError: No token configured (checked before any I/O)
            UpstreamError: Non-success status or transport failure
        """
        headers = self._headers(body is not None)
        params = normalize_query(query) if query is not None else None
        content = json.dumps(clean_payload(body)) if body is not None else None

        logger.debug(f"ClickUp request: {method} {path} params={params}")
        async with httpx.AsyncClient(
            base_url=self.settings.clickup_api_base,
            timeout=self.settings.request_timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, params=params, content=content, headers=headers)
                text = response.text
            except httpx.RequestError as e:
                logger.error(f"Request error during {method} {path}: {type(e).__name__}: {e}")
                raise UpstreamError(
                    f"ClickUp request failed: {method} {path}",
                    details={"reason": str(e) or type(e).__name__},
                ) from e

        result = parse_body(text)
        if not response.is_success:
            logger.warning(f"ClickUp {response.status_code} for {method} {path}: {result}")
            raise UpstreamError(f"ClickUp {response.status_code}", status=response.status_code, details=result)

        return result
