# ---------------------------------------------------------------------------
# app.py
# ---------------------------------------------------------------------------
"""Search an Elasticsearch index with a structured query body."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import ValidationError

from common_utils import configure_logger, error_response, is_proxy_event, lambda_response, parse_event_body
from elastic_search import ElasticClient, ElasticError
from elastic_search.events import SearchEvent

# Module Metadata
__author__ = "Koushik Sinha"
__version__ = "1.0.0"
__modified_by__ = "Koushik Sinha"

logger = configure_logger(__name__)

client = ElasticClient.from_env()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Triggered to run a query DSL search (``POST _search``).

    1. Builds the request body from ``query``, ``size``, ``from``, ``sort``
       and ``_source``. A missing ``query`` means ``match_all``.
    2. Posts it to the configured index.

    Returns the full search response (``took``, ``_shards``, ``hits``).
    """

    proxy = is_proxy_event(event)
    try:
        payload = SearchEvent.model_validate(parse_event_body(event))
    except (ValidationError, ValueError) as exc:
        return error_response(logger, 400, "Invalid event", exc, detail=str(exc), serialize=proxy)

    es = client.for_index(payload.index) if payload.index else client
    try:
        result = es.search(payload.to_search_query())
    except ElasticError as exc:
        return error_response(
            logger,
            502,
            "Elasticsearch search failed",
            exc,
            detail=str(exc),
            status_code=getattr(exc, "status_code", None),
            serialize=proxy,
        )
    logger.info("Search took %dms and matched %d documents", result.took, result.hits.total)
    body = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return lambda_response(200, body, serialize=proxy)
