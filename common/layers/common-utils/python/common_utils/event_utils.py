"""Helpers for normalising Lambda event payloads."""

from __future__ import annotations

import json
from typing import Any, Dict

__all__ = ["parse_event_body", "is_proxy_event"]


def parse_event_body(event: Any) -> Dict[str, Any]:
    """Return the request payload carried by ``event``.

    Direct invocations pass the payload as the event itself. API Gateway
    proxy events wrap it in ``body``, either as a dict or a JSON string.
    """

    if not isinstance(event, dict):
        raise ValueError("Event must be a JSON object")
    if "body" not in event:
        return event
    body = event.get("body")
    if body is None or body == "":
        return {}
    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Event body is not valid JSON: {exc.msg}") from None
    if not isinstance(body, dict):
        raise ValueError("Event body must be a JSON object")
    return body


def is_proxy_event(event: Any) -> bool:
    """Return ``True`` when ``event`` came through an API Gateway proxy."""

    return isinstance(event, dict) and "body" in event
