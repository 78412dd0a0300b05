"""Outbound payload normalization.

Pure helpers shared by the client and handlers. Bodies are cleaned of absent
values; query strings additionally expand sequences into repeated keys.
"""
from typing import Any, Mapping, Optional


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (list, tuple)) and len(value) == 0


def clean_payload(payload: Optional[Mapping[str, Any]]) -> dict:
    """Drop entries whose value is None or an empty list, keeping key order."""
    return {key: value for key, value in (payload or {}).items() if not _is_empty(value)}


def normalize_query(query: Optional[Mapping[str, Any]]) -> list[tuple[str, Any]]:
    """Encode a query mapping as ordered (key, value) pairs.

    Sequence values are emitted once per element under the same key, e.g.
    ``{"a": [1, 2], "b": "x"}`` -> ``[("a", 1), ("a", 2), ("b", "x")]``.
    """
    pairs: list[tuple[str, Any]] = []
    for key, value in clean_payload(query).items():
        if isinstance(value, (list, tuple)):
            pairs.extend((key, item) for item in value)
        else:
            pairs.append((key, value))
    return pairs


def items_of(document: Any, key: str) -> list:
    """Return ``document[key]`` as a list, tolerating non-object bodies."""
    if not isinstance(document, dict):
        return []
    return document.get(key) or []
