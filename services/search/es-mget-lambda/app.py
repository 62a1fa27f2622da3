# ---------------------------------------------------------------------------
# app.py
# ---------------------------------------------------------------------------
"""Fetch several Elasticsearch documents by ID."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import ValidationError

from common_utils import configure_logger, error_response, is_proxy_event, lambda_response, parse_event_body
from elastic_search import ElasticClient, ElasticError
from elastic_search.events import MultiGetEvent

# Module Metadata
__author__ = "Koushik Sinha"
__version__ = "1.0.0"
__modified_by__ = "Koushik Sinha"

logger = configure_logger(__name__)

client = ElasticClient.from_env()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Triggered to load documents with ``_mget``.

    Returns every requested document with its ``found`` flag.
    """

    proxy = is_proxy_event(event)
    try:
        payload = MultiGetEvent.model_validate(parse_event_body(event))
    except (ValidationError, ValueError) as exc:
        return error_response(logger, 400, "Invalid event", exc, detail=str(exc), serialize=proxy)

    es = client.for_index(payload.index) if payload.index else client
    try:
        result = es.multi_get(payload.ids)
    except ElasticError as exc:
        return error_response(
            logger,
            502,
            "Elasticsearch multi-get failed",
            exc,
            detail=str(exc),
            status_code=getattr(exc, "status_code", None),
            serialize=proxy,
        )
    logger.info("Found %d of %d documents", len(result.found_docs()), len(payload.ids))
    body = result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return lambda_response(200, body, serialize=proxy)
