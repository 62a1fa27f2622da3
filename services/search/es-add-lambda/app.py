# ---------------------------------------------------------------------------
# app.py
# ---------------------------------------------------------------------------
"""Add a document to an Elasticsearch index."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import ValidationError

from common_utils import configure_logger, error_response, is_proxy_event, lambda_response, parse_event_body
from elastic_search import ElasticClient, ElasticError
from elastic_search.events import AddEvent

# Module Metadata
__author__ = "Koushik Sinha"
__version__ = "1.0.0"
__modified_by__ = "Koushik Sinha"

logger = configure_logger(__name__)

client = ElasticClient.from_env()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Triggered to index a new ``document``.

    The document is posted to ``/{index}/{type}/`` so Elasticsearch assigns
    the ID. Returns the ID and ``result`` reported by Elasticsearch.
    """

    proxy = is_proxy_event(event)
    try:
        payload = AddEvent.model_validate(parse_event_body(event))
    except (ValidationError, ValueError) as exc:
        return error_response(logger, 400, "Invalid event", exc, detail=str(exc), serialize=proxy)

    es = client.for_index(payload.index) if payload.index else client
    try:
        result = es.add(payload.document)
    except ElasticError as exc:
        return error_response(
            logger,
            502,
            "Error in POSTing data",
            exc,
            detail=str(exc),
            status_code=getattr(exc, "status_code", None),
            serialize=proxy,
        )
    logger.info("Indexed document %s into %s", result.id, result.index)
    body = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return lambda_response(201, body, serialize=proxy)
