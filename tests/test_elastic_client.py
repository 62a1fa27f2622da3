import base64
import json
import logging

import httpx
import pytest

from elastic_search import (
    ElasticClient,
    ElasticConfig,
    ElasticRequestError,
    ElasticResponseError,
    Match,
    SearchQuery,
)


def make_client(fake_es, **kwargs):
    kwargs.setdefault("password", "")
    return ElasticClient("http://es:9200/", "docs", http_client=fake_es.client(), **kwargs)


def test_query_builds_get_url(fake_es, search_response):
    fake_es.reply("GET", "/docs/_search", json_body=search_response)
    client = make_client(fake_es)

    hits = client.query(10, 5, "q=title%3Afoo")

    request = fake_es.last
    assert request.method == "GET"
    assert request.url.params["size"] == "5"
    assert request.url.params["from"] == "10"
    assert request.url.params["q"] == "title:foo"
    assert hits.total == 2
    assert hits.hits[1].data == {"title": "second"}


def test_query_without_fragment(fake_es, search_response):
    fake_es.reply("GET", "/docs/_search", json_body=search_response)
    make_client(fake_es).query(0, 10)
    assert dict(fake_es.last.url.params) == {"size": "10", "from": "0"}


def test_basic_auth_attached_when_password_set(fake_es, search_response):
    fake_es.reply("GET", "/docs/_search", json_body=search_response)
    client = make_client(fake_es, username="elastic", password="secret")
    client.query(0, 1)
    expected = "Basic " + base64.b64encode(b"elastic:secret").decode()
    assert fake_es.last.headers["Authorization"] == expected


def test_no_auth_without_password(fake_es, search_response):
    fake_es.reply("GET", "/docs/_search", json_body=search_response)
    make_client(fake_es, username="elastic").query(0, 1)
    assert "Authorization" not in fake_es.last.headers


def test_credentials_default_to_environment(monkeypatch, fake_es, search_response):
    monkeypatch.setenv("ELASTIC_USER", "env-user")
    monkeypatch.setenv("ELASTIC_PASS", "env-pass")
    fake_es.reply("GET", "/docs/_search", json_body=search_response)
    client = ElasticClient("es:9200", "docs", http_client=fake_es.client())
    client.query(0, 1)
    assert client.base_url == "http://es:9200"
    expected = "Basic " + base64.b64encode(b"env-user:env-pass").decode()
    assert fake_es.last.headers["Authorization"] == expected


def test_query_struct_posts_body(fake_es, search_response):
    fake_es.reply("POST", "/docs/_search", json_body=search_response)
    client = make_client(fake_es)

    hits = client.query_struct(SearchQuery(query=Match(field="title", query="first"), size=1))

    assert fake_es.last.method == "POST"
    assert fake_es.last_json() == {"query": {"match": {"title": {"query": "first"}}}, "size": 1}
    assert [h.id for h in hits.hits] == ["1", "2"]


def test_search_accepts_plain_dict_and_default(fake_es, search_response):
    fake_es.reply("POST", "/docs/_search", json_body=search_response)
    client = make_client(fake_es)

    result = client.search({"query": {"term": {"id": "1"}}})
    assert fake_es.last_json() == {"query": {"term": {"id": "1"}}}
    assert result.took == 3

    client.search()
    assert fake_es.last_json() == {"query": {"match_all": {}}}


def test_multi_get(fake_es):
    fake_es.reply(
        "POST",
        "/docs/_mget",
        json_body={"docs": [{"_index": "docs", "_id": "1", "found": True, "_source": {"a": 1}}]},
    )
    resp = make_client(fake_es).multi_get(["1", 2])
    assert fake_es.last_json() == {"ids": ["1", "2"]}
    assert resp.found_docs()[0].source == {"a": 1}


def test_multi_get_empty_ids_skips_request(fake_es):
    resp = make_client(fake_es).multi_get([])
    assert resp.docs == []
    assert fake_es.requests == []


def test_mapping(fake_es):
    fake_es.reply("GET", "/docs/_mapping", json_body={"docs": {"mappings": {"properties": {"t": {"type": "text"}}}}})
    resp = make_client(fake_es).mapping()
    assert resp.properties() == {"t": {"type": "text"}}


def test_add_posts_to_type_path(fake_es):
    fake_es.reply("POST", "/docs/post/", status=201, json_body={"_index": "docs", "_id": "abc", "result": "created"})
    client = make_client(fake_es, doc_type="post")
    resp = client.add({"data": {"title": "hello"}})
    assert fake_es.last_json() == {"data": {"title": "hello"}}
    assert resp.id == "abc"
    assert resp.ok is True


def test_add_raw_json_string_without_type(fake_es):
    fake_es.reply("POST", "/docs/_doc/", json_body={"_index": "docs", "_id": "1", "created": True})
    resp = make_client(fake_es).add('{"data": 1}')
    assert fake_es.last.headers["Content-Type"] == "application/json"
    assert json.loads(fake_es.last.content) == {"data": 1}
    assert resp.ok is True


def test_add_failure_raises(fake_es):
    fake_es.reply("POST", "/docs/_doc/", status=400, json_body={"error": "mapper_parsing_exception"})
    with pytest.raises(ElasticResponseError) as err:
        make_client(fake_es).add({"title": ["not", "a", "string"]})
    assert str(err.value) == "Error in POSTing data"
    assert err.value.status_code == 400
    assert "mapper_parsing_exception" in err.value.body


def test_error_status_raises(fake_es):
    fake_es.reply("POST", "/docs/_search", status=503, json_body={"error": "unavailable"})
    with pytest.raises(ElasticResponseError) as err:
        make_client(fake_es).search()
    assert err.value.status_code == 503


def test_invalid_json_raises(fake_es):
    fake_es.reply("GET", "/docs/_search", text="<html>gateway</html>")
    with pytest.raises(ElasticResponseError, match="not valid JSON"):
        make_client(fake_es).query(0, 1)


def test_unexpected_payload_raises(fake_es):
    fake_es.reply("GET", "/docs/_mapping", json_body=["not", "a", "mapping"])
    with pytest.raises(ElasticResponseError):
        make_client(fake_es).mapping()


def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = ElasticClient(
        "http://es:9200",
        "docs",
        password="",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    with pytest.raises(ElasticRequestError, match="connection refused"):
        client.query(0, 1)


def test_for_index_shares_connection(fake_es, search_response):
    fake_es.reply("GET", "/other/_search", json_body=search_response)
    client = make_client(fake_es, username="u", password="p")
    other = client.for_index("other")
    other.query(0, 1)
    assert other is not client
    assert other._http is client._http
    assert fake_es.last.url.path == "/other/_search"
    assert "Authorization" in fake_es.last.headers
    assert client.for_index("docs") is client


def test_index_required():
    with pytest.raises(ValueError):
        ElasticClient("http://es", "")


def test_from_env_reads_environment(monkeypatch, fake_es):
    monkeypatch.setenv("ELASTIC_URL", "https://search.example.com/")
    monkeypatch.setenv("ELASTIC_INDEX", "articles")
    monkeypatch.setenv("ELASTIC_TYPE", "article")
    monkeypatch.setenv("ELASTIC_TIMEOUT", "3")
    client = ElasticClient.from_env(http_client=fake_es.client())
    assert client.base_url == "https://search.example.com"
    assert client.index == "articles"
    assert client.doc_type == "article"
    assert client.timeout == 3.0
    assert client.password == ""


def test_config_falls_back_to_ssm(config):
    config["/parameters/search/dev/ELASTIC_URL"] = "http://ssm-host:9200"
    config["/parameters/search/dev/ELASTIC_PASS"] = "from-ssm"
    cfg = ElasticConfig.from_env()
    assert cfg.url == "http://ssm-host:9200"
    assert cfg.password == "from-ssm"
    assert cfg.index == "docs"


def test_config_password_from_secrets_manager(monkeypatch):
    import elastic_search.config as c

    monkeypatch.setenv("ELASTIC_PASS_SECRET_NAME", "prod/elastic")
    requested = []

    def fake_secret(name):
        requested.append(name)
        return "vault-pass"

    monkeypatch.setattr(c, "get_secret", fake_secret)
    cfg = ElasticConfig.from_env()
    assert cfg.password == "vault-pass"
    assert requested == ["ELASTIC_PASS"]


def test_add_accepts_any_success_status(fake_es):
    fake_es.reply("POST", "/docs/_doc/", status=202, json_body={"_index": "docs", "_id": "q", "result": "created"})
    resp = make_client(fake_es).add({"data": 1})
    assert resp.id == "q"


def test_owned_client_closes_on_exit():
    with ElasticClient("http://es:9200", "docs", password="") as client:
        assert client._http.is_closed is False
    assert client._http.is_closed is True


def test_borrowed_client_stays_open(fake_es):
    http = fake_es.client()
    client = ElasticClient("http://es:9200", "docs", password="", http_client=http)
    client.close()
    assert http.is_closed is False

    owner = ElasticClient("http://es:9200", "docs", password="")
    owner.for_index("other").close()
    assert owner._http.is_closed is False
    owner.close()
    assert owner._http.is_closed is True


@pytest.mark.parametrize(
    "route, call",
    [
        (("POST", "/docs/_search", 503, {"error": "unavailable"}, None), lambda c: c.search()),
        (("GET", "/docs/_search", 200, None, "<html>gateway</html>"), lambda c: c.query(0, 1)),
        (("POST", "/docs/_doc/", 409, {"error": "conflict"}, None), lambda c: c.add({"a": 1})),
    ],
)
def test_response_failures_are_logged(caplog, fake_es, route, call):
    method, path, status, body, text = route
    fake_es.reply(method, path, status=status, json_body=body, text=text)
    caplog.set_level(logging.ERROR, logger="elastic_search.client")
    with pytest.raises(ElasticResponseError):
        call(make_client(fake_es))
    errors = [r for r in caplog.records if r.name == "elastic_search.client" and r.levelno == logging.ERROR]
    assert errors


def test_transport_failure_is_logged(caplog):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = ElasticClient(
        "http://es:9200",
        "docs",
        password="",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    caplog.set_level(logging.ERROR, logger="elastic_search.client")
    with pytest.raises(ElasticRequestError):
        client.mapping()
    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert any("connection refused" in m for m in messages)


@pytest.mark.parametrize("raw", ["soon", "-1", "0"])
def test_config_bad_timeout_falls_back(monkeypatch, caplog, raw):
    from elastic_search.config import DEFAULT_TIMEOUT

    monkeypatch.setenv("ELASTIC_TIMEOUT", raw)
    caplog.set_level(logging.WARNING, logger="elastic_search.config")
    cfg = ElasticConfig.from_env()
    assert cfg.timeout == DEFAULT_TIMEOUT
    assert any("ELASTIC_TIMEOUT" in r.getMessage() for r in caplog.records)
