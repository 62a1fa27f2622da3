"""Lambda event payloads accepted by the search functions."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from .queries import MatchAll, SearchQuery

__all__ = ["QueryEvent", "SearchEvent", "MultiGetEvent", "MappingEvent", "AddEvent"]


class SearchLambdaEvent(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # Overrides ELASTIC_INDEX for a single call
    index: Optional[str] = None


class QueryEvent(SearchLambdaEvent):
    """Query-string search, e.g. ``{"q": "title:foo", "limit": 5}``."""

    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=10, ge=0)
    q: Optional[str] = None
    query_string: str = ""

    def fragment(self) -> str:
        """Return the URL query-string fragment for this event."""

        parts = []
        if self.q:
            parts.append(urlencode({"q": self.q}))
        extra = self.query_string.lstrip("?&")
        if extra:
            parts.append(extra)
        return "&".join(parts)


class SearchEvent(SearchLambdaEvent):
    query: Optional[Dict[str, Any]] = None
    size: Optional[int] = Field(default=None, ge=0)
    from_: Optional[int] = Field(default=None, ge=0, alias="from")
    sort: Optional[List[Any]] = None
    source: Optional[Any] = Field(default=None, alias="_source")

    def to_search_query(self) -> SearchQuery:
        return SearchQuery(
            query=self.query or MatchAll(),
            size=self.size,
            from_=self.from_,
            sort=self.sort,
            source=self.source,
        )


class MultiGetEvent(SearchLambdaEvent):
    ids: List[Union[str, int]] = Field(min_length=1)


class MappingEvent(SearchLambdaEvent):
    pass


class AddEvent(SearchLambdaEvent):
    document: Union[Dict[str, Any], str]
