from __future__ import annotations

import json
from collections.abc import Collection
from typing import Any

from odds_proxy.domain.enums import EndpointKind


class MalformedPayloadError(ValueError):
    """A 2xx upstream body parsed as JSON but not in the expected shape."""


def _reject_constant(name: str) -> Any:
    raise MalformedPayloadError(f"non-JSON constant {name} in upstream payload")


def _loads(body: str) -> Any:
    return json.loads(body, parse_constant=_reject_constant)


def _dumps(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _allowed_bookmakers(event: dict, allowlist: Collection[str]) -> list[dict]:
    books = event.get("bookmakers")
    if not isinstance(books, list):
        return []
    return [
        book
        for book in books
        if isinstance(book, dict) and isinstance(book.get("title"), str) and book["title"] in allowlist
    ]


def filter_event(event: dict, allowlist: Collection[str]) -> dict:
    return {**event, "bookmakers": _allowed_bookmakers(event, allowlist)}


def filter_events(events: Any, allowlist: Collection[str]) -> list[dict]:
    if not isinstance(events, list):
        return []
    filtered = [filter_event(event, allowlist) for event in events if isinstance(event, dict)]
    return [event for event in filtered if event["bookmakers"]]


def transform_body(
    status_code: int,
    body: str,
    kind: EndpointKind,
    allowlist: Collection[str],
) -> str:
    """Filter a successful upstream body down to allow-listed bookmakers.

    Non-2xx bodies are the provider's own error payload and pass through
    untouched. A 2xx body that is not valid JSON raises ``json.JSONDecodeError``
    (or ``MalformedPayloadError`` for NaN and Infinity).

    Single-event responses are returned as a one-element array so callers get
    the same shape from both endpoints.
    """
    if not 200 <= status_code < 300:
        return body

    data = _loads(body)
    allowed = frozenset(allowlist)
    if kind is EndpointKind.COLLECTION:
        return _dumps(filter_events(data, allowed))

    if not isinstance(data, dict):
        raise MalformedPayloadError(f"expected a single event object, got {type(data).__name__}")
    return _dumps([filter_event(data, allowed)])
