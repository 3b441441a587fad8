"""Integration test fixtures (assembled app with a faked inference router).

The relay app is built by create_app() with a real HuggingFaceClient whose
transport is an httpx.MockTransport, so every layer except the network runs.
"""

from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from sentiment_relay.config import Settings
from sentiment_relay.main import create_app
from sentiment_relay.relay.hf_client import HuggingFaceClient


Handler = Callable[[httpx.Request], Any]


@pytest.fixture
def build_client(test_settings: Settings):
    """Factory fixture returning a TestClient for an app whose upstream is `handler`.
    
    Usage:
        def test_something(build_client):
            with build_client(handler, HF_TIMEOUT=0.05) as client:
                client.post("/api/analyze", json={"text": "hi"})
    """
    def _create(handler: Handler, **overrides: Any) -> TestClient:
        app_settings = test_settings.model_copy(update=overrides)
        inference_client = HuggingFaceClient(
            model_id=app_settings.MODEL_ID,
            token=app_settings.HF_TOKEN,
            base_url=app_settings.HF_BASE_URL,
            timeout=app_settings.HF_TIMEOUT,
            transport=httpx.MockTransport(handler),
        )
        return TestClient(create_app(app_settings, inference_client))
    
    return _create


@pytest.fixture
def upstream_requests() -> list[httpx.Request]:
    """Requests seen by the fake inference router."""
    return []


@pytest.fixture
def client(build_client, upstream_requests, hf_nested_response):
    """TestClient for an app whose upstream answers with the nested fixture."""
    def handler(request: httpx.Request) -> httpx.Response:
        upstream_requests.append(request)
        return httpx.Response(200, json=hf_nested_response)
    
    with build_client(handler) as test_client:
        yield test_client
