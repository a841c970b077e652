"""HTTP API tests: routes, request validation and response shapes."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from intent_matcher.config.settings import DEFAULT_INTENTS, Settings
from intent_matcher.routes.api import create_app

CUSTOM_INTENTS = {"greeting": ["Hola"], "thanks": ["Gracias"]}


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(Settings()))


def test_root_lists_endpoints(client: TestClient) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert "POST /classify" in r.json()["endpoints"]


def test_health(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["timestamp"]


def test_intents_lists_default_catalog(client: TestClient) -> None:
    r = client.get("/intents")
    assert r.status_code == 200
    assert r.json() == {"intents": list(DEFAULT_INTENTS), "total": len(DEFAULT_INTENTS)}


def test_classify_default_catalog(client: TestClient) -> None:
    r = client.post("/classify", json={"text": "Quiero mi recibo"})
    assert r.status_code == 200
    body = r.json()
    assert body["text"] == "Quiero mi recibo"
    assert body["result"]["intent"] == "receipt"
    assert body["result"]["matchedExample"] == "Quiero mi recibo"
    assert body["result"]["confidence"] == pytest.approx(1.0)
    assert body["timestamp"]


def test_classify_custom_intents(client: TestClient) -> None:
    r = client.post("/classify", json={"text": "hola", "intents": CUSTOM_INTENTS})
    assert r.status_code == 200
    assert r.json()["result"] == {"intent": "greeting", "confidence": pytest.approx(1.0), "matchedExample": "Hola"}


def test_classify_unknown_has_null_example_for_empty_catalog(client: TestClient) -> None:
    r = client.post("/classify", json={"text": "hola", "intents": {}})
    assert r.status_code == 200
    assert r.json()["result"] == {"intent": "unknown", "confidence": 0.0, "matchedExample": None}


def test_classify_options_from_body(client: TestClient) -> None:
    intents = {"current": ["saldo actual"], "previous": ["saldo anterior"]}
    lenient = client.post("/classify", json={"text": "saldo", "intents": intents, "threshold": 0.5, "minMargin": 0})
    assert lenient.json()["result"]["intent"] == "current"
    strict = client.post("/classify", json={"text": "saldo", "intents": intents, "threshold": 0.5})
    assert strict.json()["result"]["intent"] == "unknown"


def test_custom_catalog_indexes_are_cached(client: TestClient) -> None:
    cache = client.app.state.index_cache
    client.post("/classify", json={"text": "hola", "intents": CUSTOM_INTENTS})
    client.post("/classify", json={"text": "gracias", "intents": CUSTOM_INTENTS})
    assert len(cache) == 1


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"text": ""},
        {"text": 123},
        {"text": None},
        {"text": "hola", "threshold": 1.5},
        {"text": "hola", "minMargin": -1},
    ],
)
def test_classify_invalid_body_is_400(client: TestClient, payload) -> None:
    r = client.post("/classify", json=payload)
    assert r.status_code == 400
    assert "error" in r.json()


@pytest.mark.parametrize(
    "intents,fragment",
    [
        (["Hola"], "must be an object"),
        ("greeting", "must be an object"),
        ({"greeting": "Hola"}, "'greeting'"),
        ({"greeting": ["Hola", 3]}, "'greeting'"),
    ],
)
def test_classify_malformed_intents_is_400(client: TestClient, intents, fragment: str) -> None:
    r = client.post("/classify", json={"text": "hola", "intents": intents})
    assert r.status_code == 400
    body = r.json()
    assert fragment in body["error"]
    assert body["code"] == "invalid_catalog"


def test_batch_keeps_order(client: TestClient) -> None:
    texts = ["gracias", "hola", "xyz completely unrelated"]
    r = client.post("/classify/batch", json={"texts": texts, "intents": CUSTOM_INTENTS})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 3
    assert [item["text"] for item in body["results"]] == texts
    assert [item["result"]["intent"] for item in body["results"]] == ["thanks", "greeting", "unknown"]


@pytest.mark.parametrize("payload", [{}, {"texts": []}, {"texts": "hola"}, {"texts": ["hola", 5]}])
def test_batch_invalid_texts_is_400(client: TestClient, payload) -> None:
    r = client.post("/classify/batch", json=payload)
    assert r.status_code == 400


def test_batch_malformed_intents_is_400(client: TestClient) -> None:
    r = client.post("/classify/batch", json={"texts": ["hola"], "intents": {"greeting": "Hola"}})
    assert r.status_code == 400


def test_unknown_route_is_404(client: TestClient) -> None:
    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json()["error"] == "Route not found"


def test_settings_strategy_and_catalog_file(tmp_path) -> None:
    path = tmp_path / "intents.json"
    path.write_text('{"greet": ["hello there"], "bye": ["goodbye"]}', encoding="utf-8")
    app = create_app(Settings(intents_path=str(path), strategy="token_set"))
    c = TestClient(app)
    assert c.get("/intents").json() == {"intents": ["greet", "bye"], "total": 2}
    assert c.post("/classify", json={"text": "hello there"}).json()["result"]["intent"] == "greet"


def test_error_bodies_follow_error_model(client: TestClient) -> None:
    validation = client.post("/classify", json={"text": ""}).json()
    assert validation["error"] == "Invalid request body"
    assert validation["details"]
    assert "code" not in validation

    catalog = client.post("/classify", json={"text": "hola", "intents": []}).json()
    assert catalog["code"] == "invalid_catalog"
    assert "details" not in catalog


def test_openapi_declares_error_model_for_post_routes(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    for path in ("/classify", "/classify/batch"):
        bad_request = schema["paths"][path]["post"]["responses"]["400"]
        assert bad_request["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
