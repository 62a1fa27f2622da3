import importlib
import importlib.util
import json
import os
import sys

import httpx
import pytest

ROOT = os.path.dirname(os.path.dirname(__file__))
for layer in ("common-utils", "elastic-layer"):
    path = os.path.join(ROOT, "common", "layers", layer, "python")
    if path not in sys.path:
        sys.path.insert(0, path)

os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

_ENV_VARS = [
    "ELASTIC_URL",
    "ELASTIC_INDEX",
    "ELASTIC_TYPE",
    "ELASTIC_USER",
    "ELASTIC_PASS",
    "ELASTIC_PASS_SECRET_NAME",
    "ELASTIC_TIMEOUT",
    "SSM_PARAMETER_PREFIX",
    "LOG_LEVEL",
    "LOG_JSON",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    import common_utils.get_ssm as g
    # the package re-exports a function named get_secret over the submodule
    s = importlib.import_module("common_utils.get_secret")
    g._SSM_CACHE.clear()
    s._SECRET_CACHE.clear()
    yield


@pytest.fixture
def config(monkeypatch):
    """Parameter Store contents keyed by full parameter name."""
    import common_utils.get_ssm as g
    params = {}
    monkeypatch.setenv("SSM_PARAMETER_PREFIX", "/parameters/search/dev")
    monkeypatch.setattr(g, "get_values_from_ssm", lambda name, decrypt=False: params.get(name))
    return params


def load_lambda(name, path):
    spec = importlib.util.spec_from_file_location(name, os.path.join(ROOT, path))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class FakeElastic:
    """Records requests and answers them from a route table."""

    def __init__(self):
        self.requests = []
        self.routes = {}

    def reply(self, method, path, status=200, json_body=None, text=None):
        self.routes[(method, path)] = (status, json_body, text)

    def handler(self, request):
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"error": "no route", "path": request.url.path})
        status, json_body, text = self.routes[key]
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=json_body)

    @property
    def last(self):
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)

    def client(self):
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_es():
    return FakeElastic()


@pytest.fixture
def search_response():
    return {
        "took": 3,
        "timed_out": False,
        "_shards": {"total": 1, "successful": 1, "failed": 0},
        "hits": {
            "total": {"value": 2, "relation": "eq"},
            "max_score": 1.5,
            "hits": [
                {"_index": "docs", "_id": "1", "_score": 1.5, "_source": {"data": {"title": "first"}}},
                {"_index": "docs", "_id": "2", "_score": 0.7, "_source": {"data": {"title": "second"}}},
            ],
        },
    }
