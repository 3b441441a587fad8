"""
Inference relay client abstraction and implementation.

Components:
- BaseInferenceClient: Abstract base class for inference clients
- HuggingFaceClient: Implementation for the Hugging Face inference router
- exceptions: Relay-specific exceptions
"""

from sentiment_relay.relay.base_client import BaseInferenceClient
from sentiment_relay.relay.exceptions import (
    InvalidInputError,
    MisconfigurationError,
    NetworkFailureError,
    RelayError,
    UpstreamError,
    UpstreamTimeoutError,
)
from sentiment_relay.relay.hf_client import HuggingFaceClient

__all__ = [
    "BaseInferenceClient",
    "HuggingFaceClient",
    "RelayError",
    "InvalidInputError",
    "MisconfigurationError",
    "UpstreamError",
    "UpstreamTimeoutError",
    "NetworkFailureError",
]
