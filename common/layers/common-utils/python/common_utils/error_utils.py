from __future__ import annotations

"""Helpers for consistent error logging and responses."""

from typing import Any, Dict
import logging

from .lambda_response import lambda_response

__all__ = ["error_response"]


def error_response(
    logger: logging.Logger,
    status: int,
    message: str,
    exc: Exception | None = None,
    /,
    *,
    serialize: bool = False,
    **details: Any,
) -> Dict[str, Any]:
    """Return ``lambda_response`` with error details after logging ``message``.

    Extra keyword arguments are added to the response body next to
    ``error``; ``None`` values are dropped. ``serialize`` is passed through
    to :func:`lambda_response`.
    """

    if exc is not None:
        logger.error("%s: %s", message, exc)
    else:
        logger.error("%s", message)
    body: Dict[str, Any] = {"error": message}
    body.update({k: v for k, v in details.items() if v is not None})
    return lambda_response(status, body, serialize=serialize)
