"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

from unittest.mock import AsyncMock

import pytest

from sentiment_relay.relay.base_client import BaseInferenceClient


@pytest.fixture
def mock_inference_client():
    """Mock inference client answering with a nested text-classification payload."""
    mock = AsyncMock(spec=BaseInferenceClient)
    mock.analyze = AsyncMock(return_value=[[
        {"label": "positive", "score": 0.91},
        {"label": "neutral", "score": 0.07},
        {"label": "negative", "score": 0.02},
    ]])
    mock.close = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_relay_client():
    """Mock RelayClient for session tests (already unwrapped payload)."""
    mock = AsyncMock()
    mock.analyze = AsyncMock(return_value=[
        {"label": "LABEL_2", "score": 0.88},
        {"label": "LABEL_1", "score": 0.10},
        {"label": "LABEL_0", "score": 0.02},
    ])
    mock.close = AsyncMock(return_value=None)
    return mock
