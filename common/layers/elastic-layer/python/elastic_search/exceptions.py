"""Errors raised by :class:`elastic_search.ElasticClient`."""

from __future__ import annotations

from typing import Optional

__all__ = ["ElasticError", "ElasticRequestError", "ElasticResponseError"]


class ElasticError(Exception):
    """Base class for all client errors."""


class ElasticRequestError(ElasticError):
    """The HTTP request could not be sent or no response was received."""


class ElasticResponseError(ElasticError):
    """The service answered with an error status or an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
