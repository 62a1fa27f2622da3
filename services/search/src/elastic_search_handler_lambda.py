"""Elasticsearch search operations handler."""

from __future__ import annotations

from typing import Any, Callable, Dict, Tuple

from pydantic import BaseModel, ValidationError

from common_utils import configure_logger, error_response, is_proxy_event, lambda_response, parse_event_body
from elastic_search import ElasticClient, ElasticError
from elastic_search.events import AddEvent, MappingEvent, MultiGetEvent, QueryEvent, SearchEvent

logger = configure_logger(__name__)

client = ElasticClient.from_env()


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _query(es: ElasticClient, payload: QueryEvent) -> Tuple[int, Dict[str, Any]]:
    return 200, _dump(es.query(payload.offset, payload.limit, payload.fragment()))


def _search(es: ElasticClient, payload: SearchEvent) -> Tuple[int, Dict[str, Any]]:
    return 200, _dump(es.search(payload.to_search_query()))


def _mget(es: ElasticClient, payload: MultiGetEvent) -> Tuple[int, Dict[str, Any]]:
    return 200, _dump(es.multi_get(payload.ids))


def _mapping(es: ElasticClient, payload: MappingEvent) -> Tuple[int, Dict[str, Any]]:
    return 200, es.mapping().model_dump(mode="json")


def _add(es: ElasticClient, payload: AddEvent) -> Tuple[int, Dict[str, Any]]:
    return 201, _dump(es.add(payload.document))


_HANDLERS: Dict[str, Tuple[type[BaseModel], Callable[[ElasticClient, Any], Tuple[int, Dict[str, Any]]]]] = {
    "query": (QueryEvent, _query),
    "search": (SearchEvent, _search),
    "mget": (MultiGetEvent, _mget),
    "mapping": (MappingEvent, _mapping),
    "add": (AddEvent, _add),
}


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Triggered to run one Elasticsearch operation named by the event.

    1. Reads ``operation`` (or ``action``), one of ``query``, ``search``,
       ``mget``, ``mapping`` or ``add``. Defaults to ``search``.
    2. Validates the rest of the event against that operation's model.
    3. Runs the operation, against ``index`` when the event names one.

    Returns the operation's result, ``400`` for a bad event and ``502`` when
    Elasticsearch fails.
    """

    proxy = is_proxy_event(event)
    try:
        body = parse_event_body(event)
    except ValueError as exc:
        return error_response(logger, 400, "Invalid event", exc, detail=str(exc), serialize=proxy)

    op = str(body.get("operation") or body.get("action") or "search").lower()
    entry = _HANDLERS.get(op)
    if not entry:
        return error_response(logger, 400, "unsupported operation", operation=op, serialize=proxy)
    event_model, handler = entry

    try:
        payload = event_model.model_validate(body)
    except ValidationError as exc:
        return error_response(logger, 400, "Invalid event", exc, detail=str(exc), serialize=proxy)

    es = client.for_index(payload.index) if payload.index else client
    try:
        status, result = handler(es, payload)
    except ElasticError as exc:
        return error_response(
            logger,
            502,
            f"Elasticsearch {op} failed",
            exc,
            detail=str(exc),
            status_code=getattr(exc, "status_code", None),
            serialize=proxy,
        )
    return lambda_response(status, result, serialize=proxy)
