# ---------------------------------------------------------------------------
# app.py
# ---------------------------------------------------------------------------
"""Return the mapping of an Elasticsearch index."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import ValidationError

from common_utils import configure_logger, error_response, is_proxy_event, lambda_response, parse_event_body
from elastic_search import ElasticClient, ElasticError
from elastic_search.events import MappingEvent

# Module Metadata
__author__ = "Koushik Sinha"
__version__ = "1.0.0"
__modified_by__ = "Koushik Sinha"

logger = configure_logger(__name__)

client = ElasticClient.from_env()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Triggered to read the field mapping of an index (``GET _mapping``).

    1. Accepts an empty event, or one naming another ``index``.
    2. Issues ``GET /{index}/_mapping``.

    Returns the mapping keyed by index name.
    """

    proxy = is_proxy_event(event)
    try:
        payload = MappingEvent.model_validate(parse_event_body(event or {}))
    except (ValidationError, ValueError) as exc:
        return error_response(logger, 400, "Invalid event", exc, detail=str(exc), serialize=proxy)

    es = client.for_index(payload.index) if payload.index else client
    try:
        result = es.mapping()
    except ElasticError as exc:
        return error_response(
            logger,
            502,
            "Elasticsearch mapping lookup failed",
            exc,
            detail=str(exc),
            status_code=getattr(exc, "status_code", None),
            serialize=proxy,
        )
    return lambda_response(200, result.model_dump(mode="json"), serialize=proxy)
