"""Minimal HTTP client for an Elasticsearch index, for use inside Lambda."""

from __future__ import annotations

# Module Metadata
__author__ = "Koushik Sinha"
__version__ = "1.0.0"
__modified_by__ = "Koushik Sinha"

import os
from typing import Any, Dict, Iterable, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from common_utils import configure_logger

from .config import DEFAULT_TIMEOUT, ElasticConfig
from .exceptions import ElasticRequestError, ElasticResponseError
from .models import Hits, IndexResponse, MappingResponse, MultiGetResponse, SearchResponse
from .queries import SearchQuery

logger = configure_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

JSON_HEADERS = {"Content-Type": "application/json"}


def _normalize_base_url(url: str) -> str:
    """Add ``http://`` to bare hosts and drop trailing slashes."""

    if not url.startswith(("http://", "https://")):
        url = f"http://{url}"
    return url.rstrip("/")


class ElasticClient:
    """Issue single request/response calls against one index.

    Every public method builds a URL under ``{base_url}/{index}``, attaches
    basic auth when a password is configured, sends one HTTP request and
    parses the JSON reply into the matching model from
    :mod:`elastic_search.models`.
    """

    def __init__(
        self,
        base_url: str,
        index: str,
        doc_type: Optional[str] = None,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """Create a client for ``index`` on ``base_url``.

        ``username`` and ``password`` default to the ``ELASTIC_USER`` and
        ``ELASTIC_PASS`` environment variables. Pass ``http_client`` to reuse
        an existing :class:`httpx.Client`; otherwise one is created and owned
        by this instance.
        """

        if not index:
            raise ValueError("index must be provided")
        self.base_url = _normalize_base_url(base_url)
        self.index = index
        self.doc_type = doc_type
        self.username = os.environ.get("ELASTIC_USER", "") if username is None else username
        self.password = os.environ.get("ELASTIC_PASS", "") if password is None else password
        self.timeout = timeout
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config: ElasticConfig, http_client: Optional[httpx.Client] = None) -> "ElasticClient":
        return cls(
            config.url,
            config.index,
            config.doc_type,
            username=config.username,
            password=config.password,
            timeout=config.timeout,
            http_client=http_client,
        )

    @classmethod
    def from_env(cls, http_client: Optional[httpx.Client] = None) -> "ElasticClient":
        """Create a client from ``ELASTIC_*`` settings."""

        return cls.from_config(ElasticConfig.from_env(), http_client=http_client)

    def for_index(self, index: str) -> "ElasticClient":
        """Return a client for ``index`` sharing this client's connection."""

        if index == self.index:
            return self
        return ElasticClient(
            self.base_url,
            index,
            self.doc_type,
            username=self.username,
            password=self.password,
            timeout=self.timeout,
            http_client=self._http,
        )

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ElasticClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------
    @property
    def index_url(self) -> str:
        return f"{self.base_url}/{self.index}"

    def _auth(self) -> Optional[httpx.BasicAuth]:
        if self.password:
            return httpx.BasicAuth(self.username, self.password)
        return None

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            return self._http.request(method, url, auth=self._auth(), timeout=self.timeout, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise ElasticRequestError(f"{method} {url} failed: {exc}") from exc

    def _decode(self, resp: httpx.Response) -> Any:
        if resp.is_error:
            logger.error(
                "%s %s returned HTTP %s: %s",
                resp.request.method,
                resp.request.url,
                resp.status_code,
                resp.text,
            )
            raise ElasticResponseError(
                f"Elasticsearch returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("Could not decode response from %s: %s", resp.request.url, exc)
            raise ElasticResponseError(
                "Response body is not valid JSON", status_code=resp.status_code, body=resp.text
            ) from exc

    def _parse(self, model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.error("Unexpected %s payload: %s", model.__name__, exc)
            raise ElasticResponseError(f"Unexpected {model.__name__} payload: {exc}") from exc

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def query(self, offset: int, limit: int, search_query: str = "") -> Hits:
        """Search with a URL query string and return the hits.

        ``search_query`` is a raw query-string fragment such as
        ``q=title:foo`` appended after the paging parameters.
        """

        url = f"{self.index_url}/_search?size={int(limit)}&from={int(offset)}"
        extra = (search_query or "").lstrip("?&")
        if extra:
            url = f"{url}&{extra}"
        resp = self._send("GET", url)
        return self._parse(SearchResponse, self._decode(resp)).hits

    def search(self, search_query: Union[SearchQuery, Dict[str, Any], None] = None) -> SearchResponse:
        """POST a structured query to ``_search`` and return the full response."""

        if search_query is None:
            search_query = SearchQuery()
        body = search_query.to_body() if isinstance(search_query, SearchQuery) else search_query
        resp = self._send("POST", f"{self.index_url}/_search", json=body)
        return self._parse(SearchResponse, self._decode(resp))

    def query_struct(self, search_query: Union[SearchQuery, Dict[str, Any], None] = None) -> Hits:
        """POST a structured query to ``_search`` and return the hits."""

        return self.search(search_query).hits

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------
    def multi_get(self, ids: Iterable[str]) -> MultiGetResponse:
        """Fetch several documents by ID with ``_mget``."""

        id_list = [str(i) for i in ids]
        if not id_list:
            return MultiGetResponse()
        resp = self._send("POST", f"{self.index_url}/_mget", json={"ids": id_list})
        return self._parse(MultiGetResponse, self._decode(resp))

    def add(self, document: Union[Dict[str, Any], str, bytes]) -> IndexResponse:
        """Index ``document`` and let Elasticsearch assign its ID.

        ``document`` may be a dict or an already encoded JSON string.
        """

        url = f"{self.index_url}/{self.doc_type or '_doc'}/"
        if isinstance(document, (str, bytes)):
            resp = self._send("POST", url, content=document, headers=JSON_HEADERS)
        else:
            resp = self._send("POST", url, json=document)
        if not resp.is_success:
            logger.error("POST %s returned HTTP %s: %s", url, resp.status_code, resp.text)
            raise ElasticResponseError("Error in POSTing data", status_code=resp.status_code, body=resp.text)
        return self._parse(IndexResponse, self._decode(resp))

    # ------------------------------------------------------------------
    # Index metadata
    # ------------------------------------------------------------------
    def mapping(self) -> MappingResponse:
        """Return the field mapping of the configured index."""

        resp = self._send("GET", f"{self.index_url}/_mapping")
        return self._parse(MappingResponse, self._decode(resp))

