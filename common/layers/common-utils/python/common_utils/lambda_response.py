"""Utilities for building Lambda-style HTTP responses."""

import json
from typing import Any, Dict, Optional

__all__ = ["lambda_response"]

JSON_HEADERS = {"Content-Type": "application/json"}


def lambda_response(
    status: int,
    body: Any,
    headers: Optional[Dict[str, str]] = None,
    serialize: bool = False,
) -> Dict[str, Any]:
    """Return a standard Lambda proxy response dictionary.

    API Gateway proxy integrations require a string body, so pass
    ``serialize=True`` to JSON encode ``body``. Direct invocations get the
    Python object back unchanged.
    """
    if serialize and not isinstance(body, str):
        body = json.dumps(body)
    return {"statusCode": status, "headers": dict(headers or JSON_HEADERS), "body": body}
