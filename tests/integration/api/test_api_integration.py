"""
Integration tests for the relay API.

The full app (middleware, handlers, routes, HuggingFaceClient) runs under
TestClient; only the inference router is faked.
"""

import asyncio
import json
from datetime import datetime

import httpx
import pytest

from sentiment_relay.api.middleware import RATE_LIMIT_MESSAGE


def _respond(status_code: int, body=None, **kwargs):
    def handler(request: httpx.Request) -> httpx.Response:
        if body is None:
            return httpx.Response(status_code, **kwargs)
        return httpx.Response(status_code, json=body)
    
    return handler


# ==================== POST /api/analyze ====================

def test_analyze_passes_payload_through(client, upstream_requests, hf_nested_response):
    response = client.post("/api/analyze", json={"text": "I love this"})
    
    assert response.status_code == 200
    assert response.json() == hf_nested_response
    
    sent = upstream_requests[0]
    assert str(sent.url) == "https://hf.test/models/test-org/sentiment-model"
    assert sent.headers["Authorization"] == "Bearer hf_test_token"
    assert json.loads(sent.content) == {"inputs": "I love this"}


def test_analyze_wraps_bare_object(build_client):
    with build_client(_respond(200, {"label": "POSITIVE", "score": 0.99})) as client:
        response = client.post("/api/analyze", json={"text": "great"})
    
    assert response.status_code == 200
    assert response.json() == [{"label": "POSITIVE", "score": 0.99}]


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"text": ""},
        {"text": 42},
        {"text": None},
        {"text": ["a"]},
        {"message": "hi"},
    ],
)
def test_analyze_rejects_invalid_text(client, upstream_requests, body):
    response = client.post("/api/analyze", json=body)
    
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid text"
    assert upstream_requests == []


def test_analyze_rejects_non_json_body(client, upstream_requests):
    response = client.post(
        "/api/analyze",
        content=b"text=hello",
        headers={"Content-Type": "application/json"},
    )
    
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid text"
    assert upstream_requests == []


def test_error_body_carries_timestamp(client):
    response = client.post("/api/analyze", json={"text": ""})
    
    data = response.json()
    assert set(data) == {"error", "timestamp"}
    assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None


def test_analyze_rejects_missing_body(client):
    response = client.post("/api/analyze")
    
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid text"


def test_analyze_forwards_upstream_error(build_client, hf_loading_error):
    with build_client(_respond(503, hf_loading_error)) as client:
        response = client.post("/api/analyze", json={"text": "hello"})
    
    assert response.status_code == 503
    assert response.json()["error"] == hf_loading_error


def test_analyze_upstream_error_without_json_body(build_client):
    with build_client(_respond(502, text="Bad Gateway")) as client:
        response = client.post("/api/analyze", json={"text": "hello"})
    
    assert response.status_code == 502
    assert response.json()["error"] == "HuggingFace error"


def test_analyze_timeout(build_client):
    async def slow(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json=[])
    
    with build_client(slow, HF_TIMEOUT=0.05) as client:
        response = client.post("/api/analyze", json={"text": "hello"})
    
    assert response.status_code == 504
    assert response.json()["error"] == "HF request timeout"


def test_analyze_missing_token(build_client, upstream_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        upstream_requests.append(request)
        return httpx.Response(200, json=[])
    
    with build_client(handler, HF_TOKEN=None) as client:
        response = client.post("/api/analyze", json={"text": "hello"})
    
    assert response.status_code == 500
    assert response.json()["error"] == "Server misconfigured: missing HF_TOKEN"
    assert upstream_requests == []


def test_analyze_network_failure(build_client):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)
    
    with build_client(handler) as client:
        response = client.post("/api/analyze", json={"text": "hello"})
    
    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Server error"
    assert "Connection refused" in data["details"]


def test_analyze_rejects_get(client):
    response = client.get("/api/analyze")
    
    assert response.status_code == 405


# ==================== POST /api/sentiment ====================

def test_sentiment_interprets_payload(client):
    response = client.post("/api/sentiment", json={"text": "I love this"})
    
    assert response.status_code == 200
    data = response.json()
    assert data["result"] == {"label": "Positive", "score": 0.9812}
    assert [p["label"] for p in data["predictions"]] == ["positive", "neutral", "negative"]


def test_sentiment_index_labels(build_client, hf_index_labels_response):
    with build_client(_respond(200, hf_index_labels_response)) as client:
        response = client.post("/api/sentiment", json={"text": "meh"})
    
    assert response.status_code == 200
    assert response.json()["result"] == {"label": "Negative", "score": 0.7123}


def test_sentiment_malformed_payload(build_client):
    with build_client(_respond(200, [None, "junk", {"score": "abc"}])) as client:
        response = client.post("/api/sentiment", json={"text": "hello"})
    
    assert response.status_code == 200
    data = response.json()
    assert data["predictions"] == [
        {"label": "unknown", "score": 0.0},
        {"label": "unknown", "score": 0.0},
        {"label": "unknown", "score": 0.0},
    ]
    assert data["result"] == {"label": "Unknown", "score": 0.0}


def test_sentiment_rejects_invalid_text(client):
    response = client.post("/api/sentiment", json={"text": ""})
    
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid text"


# ==================== Service endpoints ====================

def test_health(client, upstream_requests):
    response = client.get("/health")
    
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert upstream_requests == []


def test_root_endpoint(client):
    response = client.get("/")
    
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Sentiment Relay (Test)"
    assert data["model"] == "test-org/sentiment-model"
    assert data["health"] == "/health"


# ==================== HTTP policy ====================

def test_security_headers_and_request_id(client):
    response = client.get("/health")
    
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert response.headers["Referrer-Policy"] == "no-referrer"
    assert response.headers["X-Request-ID"]


def test_security_headers_on_errors(client):
    response = client.post("/api/analyze", json={})
    
    assert response.status_code == 400
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_cors_allows_local_origin(client):
    response = client.post(
        "/api/analyze",
        json={"text": "hello"},
        headers={"Origin": "http://localhost:5500"},
    )
    
    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:5500"


def test_cors_ignores_unknown_origin(client):
    response = client.post(
        "/api/analyze",
        json={"text": "hello"},
        headers={"Origin": "https://evil.example"},
    )
    
    assert "Access-Control-Allow-Origin" not in response.headers


def test_cors_preflight(client):
    allowed = client.options(
        "/api/analyze",
        headers={
            "Origin": "http://127.0.0.1:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    denied = client.options(
        "/api/analyze",
        headers={
            "Origin": "https://evil.example",
            "Access-Control-Request-Method": "POST",
        },
    )
    
    assert allowed.status_code == 200
    assert allowed.headers["Access-Control-Allow-Origin"] == "http://127.0.0.1:3000"
    assert denied.status_code == 400


def test_rate_limit(build_client, hf_nested_response):
    handler = _respond(200, hf_nested_response)
    
    with build_client(handler, RATE_LIMIT_ENABLED=True, RATE_LIMIT_REQUESTS=3) as client:
        statuses = [
            client.post("/api/analyze", json={"text": "hello"}).status_code
            for _ in range(3)
        ]
        limited = client.post("/api/analyze", json={"text": "hello"})
    
    assert statuses == [200, 200, 200]
    assert limited.status_code == 429
    assert limited.json() == {"error": RATE_LIMIT_MESSAGE}
    assert int(limited.headers["Retry-After"]) > 0
    assert limited.headers["X-Content-Type-Options"] == "nosniff"
