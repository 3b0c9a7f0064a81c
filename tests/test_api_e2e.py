"""End-to-end tests for the intent endpoint and the resolver talking to it.

The endpoint contract: `200` with an envelope for any JSON body (model failures included), `400`
for a body that is not JSON.
"""

from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.app import create_api
from src.app import create_app
from src.config.settings import Settings
from src.intent.rules_parser import extract


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _completion(payload: dict) -> dict:
    return {"choices": [{"message": {"content": json.dumps(payload)}}]}


def test_health() -> None:
    with TestClient(create_api(_settings())) as client:
        resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_heuristic_only_without_api_key() -> None:
    with TestClient(create_api(_settings())) as client:
        resp = client.post("/api/search-intent", json={"query": "late night ramen in shibuya"})

    assert resp.status_code == 200
    assert resp.json() == {
        "intent": {
            "terms": ["ramen"],
            "locationTerms": ["shibuya"],
            "targetMinutes": 1380,
            "maxBudgetYen": None,
            "wantsNearby": False,
        },
        "source": "heuristic",
    }


@pytest.mark.parametrize("body", [{"query": "   "}, {"query": 42}, {}, ["ramen"], "ramen"])
def test_empty_or_non_string_query(body: object) -> None:
    with TestClient(create_api(_settings())) as client:
        resp = client.post("/api/search-intent", json=body)

    assert resp.status_code == 200
    assert resp.json() == {"intent": None, "source": "empty"}


@pytest.mark.parametrize("content", [b"not json", b"", b"{\"query\": "])
def test_invalid_json_body_is_400(content: bytes) -> None:
    with TestClient(create_api(_settings())) as client:
        resp = client.post(
            "/api/search-intent",
            content=content,
            headers={"Content-Type": "application/json"},
        )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid JSON body"}


def test_model_answer_is_returned_with_groq_source() -> None:
    def _handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=_completion({"terms": ["ramen"], "locationTerms": ["shibuya"], "targetMinutes": 1380}),
        )

    settings = _settings(GROQ_API_KEY="test-key")
    with TestClient(create_api(settings, client=_mock_client(_handler))) as client:
        resp = client.post("/api/search-intent", json={"query": "late night ramen in shibuya"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["source"] == "groq"
    assert data["intent"]["terms"] == ["ramen"]
    assert data["intent"]["maxBudgetYen"] is None
    assert data["intent"]["wantsNearby"] is False


def test_model_failure_is_reported_as_heuristic_200() -> None:
    def _handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    settings = _settings(GROQ_API_KEY="test-key")
    with TestClient(create_api(settings, client=_mock_client(_handler))) as client:
        resp = client.post("/api/search-intent", json={"query": "cheap izakaya near me"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["source"] == "heuristic"
    assert data["intent"] == extract("cheap izakaya near me").model_dump(by_alias=True, mode="json")


@pytest.mark.asyncio
async def test_resolver_through_endpoint_with_failing_model() -> None:
    model_calls: list[httpx.Request] = []

    def _model(request: httpx.Request) -> httpx.Response:
        model_calls.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "no json here"}}]})

    model_client = _mock_client(_model)
    api = create_api(_settings(GROQ_API_KEY="test-key"), client=model_client)
    # ASGITransport does not run the lifespan; wire the outbound client directly.
    api.state.http_client = model_client

    settings = _settings(INTENT_ENDPOINT_URL="http://testserver/api/search-intent")
    app = create_app(settings, client=httpx.AsyncClient(transport=httpx.ASGITransport(app=api)))
    try:
        query = "brunch and dinner plans"
        first = await app.resolver.resolve(query)
        second = await app.resolver.resolve(query)
    finally:
        await app.aclose()
        await model_client.aclose()

    assert first == second == extract(query)
    assert first.target_minutes == 19 * 60
    assert len(model_calls) == 1


@pytest.mark.asyncio
async def test_resolver_falls_back_when_endpoint_is_unreachable() -> None:
    def _refused(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    app = create_app(_settings(), client=_mock_client(_refused))
    try:
        intent = await app.resolver.resolve("cheap but mid-range place under 5000 yen")
    finally:
        await app.aclose()

    assert intent == extract("cheap but mid-range place under 5000 yen")
    assert intent.max_budget_yen == 1000
