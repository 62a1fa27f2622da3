"""Elasticsearch HTTP client layer shared by the search Lambdas."""

from .client import ElasticClient
from .config import ElasticConfig
from .exceptions import ElasticError, ElasticRequestError, ElasticResponseError
from .models import (
    GetResult,
    Hit,
    Hits,
    IndexResponse,
    MappingResponse,
    MultiGetResponse,
    SearchResponse,
    Shards,
)
from .queries import (
    Bool,
    Match,
    MatchAll,
    MultiMatch,
    Query,
    QueryString,
    Range,
    SearchQuery,
    Term,
    Terms,
)

__all__ = [
    "ElasticClient",
    "ElasticConfig",
    "ElasticError",
    "ElasticRequestError",
    "ElasticResponseError",
    "GetResult",
    "Hit",
    "Hits",
    "IndexResponse",
    "MappingResponse",
    "MultiGetResponse",
    "SearchResponse",
    "Shards",
    "Bool",
    "Match",
    "MatchAll",
    "MultiMatch",
    "Query",
    "QueryString",
    "Range",
    "SearchQuery",
    "Term",
    "Terms",
]
