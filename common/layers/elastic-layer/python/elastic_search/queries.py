"""Query shapes sent to the ``_search`` endpoint.

Each shape is a small pydantic model whose :meth:`to_body` returns the JSON
object Elasticsearch expects. Shapes can be nested inside :class:`Bool` and
raw dicts are accepted anywhere a clause is, so callers can mix typed and
hand-written fragments.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "Query",
    "MatchAll",
    "Match",
    "Term",
    "Terms",
    "Range",
    "MultiMatch",
    "QueryString",
    "Bool",
    "SearchQuery",
    "clause_body",
]


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def clause_body(clause: Any) -> Dict[str, Any]:
    """Return the JSON body for ``clause`` (a :class:`Query` or a dict)."""

    if isinstance(clause, Query):
        return clause.to_body()
    if isinstance(clause, dict):
        return clause
    raise TypeError(f"Unsupported query clause: {type(clause).__name__}")


def _check_clause(value: Any) -> Any:
    if not isinstance(value, (Query, dict)):
        raise ValueError("query clauses must be Query objects or dicts")
    return value


class Query(BaseModel):
    """Base class for query clauses."""

    model_config = ConfigDict(populate_by_name=True)

    def to_body(self) -> Dict[str, Any]:
        raise NotImplementedError


class MatchAll(Query):
    boost: Optional[float] = None

    def to_body(self) -> Dict[str, Any]:
        return {"match_all": _compact({"boost": self.boost})}


class Match(Query):
    field: str
    query: Any
    operator: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        return {"match": {self.field: _compact({"query": self.query, "operator": self.operator})}}


class Term(Query):
    field: str
    value: Any

    def to_body(self) -> Dict[str, Any]:
        return {"term": {self.field: self.value}}


class Terms(Query):
    field: str
    values: List[Any]

    def to_body(self) -> Dict[str, Any]:
        return {"terms": {self.field: list(self.values)}}


class Range(Query):
    field: str
    gte: Any = None
    gt: Any = None
    lte: Any = None
    lt: Any = None
    format: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        bounds = _compact(
            {"gte": self.gte, "gt": self.gt, "lte": self.lte, "lt": self.lt, "format": self.format}
        )
        return {"range": {self.field: bounds}}


class MultiMatch(Query):
    query: str
    fields: List[str]
    type: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        return {"multi_match": _compact({"query": self.query, "fields": list(self.fields), "type": self.type})}


class QueryString(Query):
    """Lucene syntax query, e.g. ``title:foo AND tags:bar``."""

    query: str
    default_field: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        return {"query_string": _compact({"query": self.query, "default_field": self.default_field})}


class Bool(Query):
    must: List[Any] = Field(default_factory=list)
    filter: List[Any] = Field(default_factory=list)
    should: List[Any] = Field(default_factory=list)
    must_not: List[Any] = Field(default_factory=list)
    minimum_should_match: Optional[Any] = None

    @field_validator("must", "filter", "should", "must_not")
    @classmethod
    def _clauses(cls, value: List[Any]) -> List[Any]:
        return [_check_clause(v) for v in value]

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        for occur in ("must", "filter", "should", "must_not"):
            clauses = getattr(self, occur)
            if clauses:
                body[occur] = [clause_body(c) for c in clauses]
        if self.minimum_should_match is not None:
            body["minimum_should_match"] = self.minimum_should_match
        return {"bool": body}


class SearchQuery(BaseModel):
    """Complete ``_search`` request body."""

    model_config = ConfigDict(populate_by_name=True)

    query: Any = Field(default_factory=MatchAll)
    size: Optional[int] = Field(default=None, ge=0)
    from_: Optional[int] = Field(default=None, ge=0, alias="from")
    sort: Optional[List[Any]] = None
    source: Optional[Any] = Field(default=None, alias="_source")

    @field_validator("query")
    @classmethod
    def _query(cls, value: Any) -> Any:
        return _check_clause(value)

    @classmethod
    def match_all(cls, size: int = 10, offset: int = 0) -> "SearchQuery":
        """Return a paged ``match_all`` search."""

        return cls(query=MatchAll(), size=size, from_=offset)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"query": clause_body(self.query)}
        extras = {"size": self.size, "from": self.from_, "sort": self.sort, "_source": self.source}
        body.update(_compact(extras))
        return body
