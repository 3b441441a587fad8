"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from sentiment_relay.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.
    
    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.HF_TIMEOUT = 0.05
    """
    return Settings(
        # === Application ===
        APP_NAME="Sentiment Relay (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        
        # === Inference endpoint ===
        HF_TOKEN="hf_test_token",
        MODEL_ID="test-org/sentiment-model",
        HF_BASE_URL="https://hf.test/models",
        HF_TIMEOUT=2.0,
        
        # === HTTP policy ===
        RATE_LIMIT_ENABLED=False,  # Enabled explicitly by rate limit tests
        
        # === Monitoring ===
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
        
        # === Session client ===
        RELAY_URL="http://relay.test",
        CLIENT_TIMEOUT=2.0,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir: Path) -> Callable[[str], Any]:
    """Factory fixture loading a JSON fixture by file name."""
    def _load(name: str) -> Any:
        with open(fixtures_dir / name, encoding="utf-8") as f:
            return json.load(f)
    
    return _load


@pytest.fixture
def hf_nested_response(load_fixture) -> list:
    """Router answer wrapped in an extra list, top label 'positive'."""
    return load_fixture("hf_nested_response.json")


@pytest.fixture
def hf_index_labels_response(load_fixture) -> list:
    """Router answer with LABEL_n labels, top label LABEL_0."""
    return load_fixture("hf_index_labels_response.json")


@pytest.fixture
def hf_loading_error(load_fixture) -> dict:
    """503 body sent while the model is loading."""
    return load_fixture("hf_loading_error.json")


@pytest.fixture
def json_transport():
    """Factory fixture building an httpx.MockTransport that always answers
    with the given status and JSON body, recording every request it sees.
    
    Usage:
        def test_something(json_transport):
            transport, seen = json_transport(200, [{"label": "pos", "score": 1}])
    """
    def _create(status_code: int, body: Any) -> tuple[httpx.MockTransport, list[httpx.Request]]:
        seen: list[httpx.Request] = []
        
        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(status_code, json=body)
        
        return httpx.MockTransport(handler), seen
    
    return _create
