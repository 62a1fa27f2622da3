# ---------------------------------------------------------------------------
# app.py
# ---------------------------------------------------------------------------
"""Search an Elasticsearch index with a URL query string."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import ValidationError

from common_utils import configure_logger, error_response, is_proxy_event, lambda_response, parse_event_body
from elastic_search import ElasticClient, ElasticError
from elastic_search.events import QueryEvent

# Module Metadata
__author__ = "Koushik Sinha"
__version__ = "1.0.0"
__modified_by__ = "Koushik Sinha"

logger = configure_logger(__name__)

client = ElasticClient.from_env()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Triggered to run a query-string search (``GET _search``).

    1. Reads ``offset``, ``limit`` and either ``q`` or a raw ``query_string``.
    2. Issues ``GET /{index}/_search?size=..&from=..`` with the extra terms.

    Returns the ``hits`` object of the search response.
    """

    proxy = is_proxy_event(event)
    try:
        payload = QueryEvent.model_validate(parse_event_body(event))
    except (ValidationError, ValueError) as exc:
        return error_response(logger, 400, "Invalid event", exc, detail=str(exc), serialize=proxy)

    es = client.for_index(payload.index) if payload.index else client
    try:
        hits = es.query(payload.offset, payload.limit, payload.fragment())
    except ElasticError as exc:
        return error_response(
            logger,
            502,
            "Elasticsearch query failed",
            exc,
            detail=str(exc),
            status_code=getattr(exc, "status_code", None),
            serialize=proxy,
        )
    logger.info("Query returned %d of %d hits", len(hits.hits), hits.total)
    body = hits.model_dump(mode="json", by_alias=True, exclude_none=True)
    return lambda_response(200, body, serialize=proxy)
