"""Typed views over Elasticsearch JSON responses."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

__all__ = [
    "Shards",
    "Hit",
    "Hits",
    "SearchResponse",
    "GetResult",
    "MultiGetResponse",
    "IndexResponse",
    "IndexMapping",
    "MappingResponse",
]


class ElasticModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _source_or_empty(value: Any) -> Any:
    # _source is null when source storage is disabled on the index
    return {} if value is None else value


class Shards(ElasticModel):
    total: int = 0
    successful: int = 0
    failed: int = 0
    skipped: Optional[int] = None


class Hit(ElasticModel):
    index: str = Field(alias="_index")
    type: Optional[str] = Field(default=None, alias="_type")
    id: str = Field(alias="_id")
    score: Optional[float] = Field(default=None, alias="_score")
    source: Dict[str, Any] = Field(default_factory=dict, alias="_source")
    sort: Optional[List[Any]] = None

    @field_validator("source", mode="before")
    @classmethod
    def _empty_source(cls, value: Any) -> Any:
        return _source_or_empty(value)

    @property
    def data(self) -> Any:
        """Payload stored under the ``data`` key of ``_source``."""
        return self.source.get("data")


class Hits(ElasticModel):
    total: int = 0
    max_score: Optional[float] = None
    hits: List[Hit] = Field(default_factory=list)

    @field_validator("total", mode="before")
    @classmethod
    def _total(cls, value: Any) -> Any:
        # 7.x and later report {"value": n, "relation": "eq"}
        if isinstance(value, dict):
            return value.get("value", 0)
        return value

    def sources(self) -> List[Dict[str, Any]]:
        return [h.source for h in self.hits]


class SearchResponse(ElasticModel):
    took: int = 0
    timed_out: bool = False
    shards: Shards = Field(default_factory=Shards, alias="_shards")
    hits: Hits = Field(default_factory=Hits)


class GetResult(ElasticModel):
    index: str = Field(alias="_index")
    type: Optional[str] = Field(default=None, alias="_type")
    id: str = Field(alias="_id")
    version: Optional[int] = Field(default=None, alias="_version")
    found: bool = False
    source: Dict[str, Any] = Field(default_factory=dict, alias="_source")

    @field_validator("source", mode="before")
    @classmethod
    def _empty_source(cls, value: Any) -> Any:
        return _source_or_empty(value)


class MultiGetResponse(ElasticModel):
    docs: List[GetResult] = Field(default_factory=list)

    def found_docs(self) -> List[GetResult]:
        """Return only the documents that exist in the index."""
        return [d for d in self.docs if d.found]


class IndexResponse(ElasticModel):
    index: str = Field(alias="_index")
    type: Optional[str] = Field(default=None, alias="_type")
    id: str = Field(alias="_id")
    version: Optional[int] = Field(default=None, alias="_version")
    result: Optional[str] = None
    created: Optional[bool] = None
    shards: Optional[Shards] = Field(default=None, alias="_shards")

    @property
    def ok(self) -> bool:
        if self.result is not None:
            return self.result in ("created", "updated")
        return bool(self.created)


class IndexMapping(ElasticModel):
    mappings: Dict[str, Any] = Field(default_factory=dict)


class MappingResponse(RootModel[Dict[str, IndexMapping]]):
    """``GET /{index}/_mapping`` keyed by concrete index name."""

    def indices(self) -> List[str]:
        return list(self.root)

    def properties(self, index: Optional[str] = None, doc_type: Optional[str] = None) -> Dict[str, Any]:
        """Return the field mapping of ``index``.

        Handles both typeless mappings and the older per-type layout. When
        ``index`` is omitted the response must contain exactly one index.
        """

        if index is None:
            if len(self.root) != 1:
                raise KeyError("index name required when the mapping covers several indices")
            index = next(iter(self.root))
        mappings = self.root[index].mappings
        if "properties" in mappings:
            return mappings["properties"]
        if doc_type is not None:
            return mappings.get(doc_type, {}).get("properties", {})
        if len(mappings) == 1:
            only = next(iter(mappings.values()))
            if isinstance(only, dict):
                return only.get("properties", {})
        return {}
