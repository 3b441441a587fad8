"""
Abstract base client for sentiment inference.

Defines the interface the API layer depends on, so the Hugging Face client
can be swapped for another provider or a fake in tests.
"""

from abc import ABC, abstractmethod
from typing import Any

import structlog


logger = structlog.get_logger(__name__)


class BaseInferenceClient(ABC):
    """
    Abstract base class for sentiment inference clients.
    
    Responsibilities:
    - Send text to the inference endpoint within a bounded wait
    - Return the decoded response body untouched (apart from list wrapping)
    - Translate transport and status failures into RelayError subclasses
    
    Does NOT handle:
    - Payload normalization (that's core.normalizer's job)
    - Label interpretation (that's core.interpreter's job)
    """
    
    def __init__(self, base_url: str, timeout: float = 25.0):
        """
        Initialize base client.
        
        Args:
            base_url: URL the text is POSTed to
            timeout: Overall deadline per request in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        
        logger.info(
            "Initialized inference client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )
    
    @abstractmethod
    async def analyze(self, text: str) -> list[Any]:
        """
        Run sentiment inference on text.
        
        Args:
            text: Non-empty text to analyze
            
        Returns:
            Decoded response body; a bare object is wrapped in a
            one-element list, nested lists are passed through as-is
            
        Raises:
            MisconfigurationError: Client cannot authenticate
            UpstreamError: Endpoint returned a non-success status
            UpstreamTimeoutError: Deadline exceeded
            NetworkFailureError: Transport-level failure
        """
        pass
    
    async def close(self):
        """
        Close client connections and cleanup resources.
        
        Default implementation does nothing.
        """
        logger.debug("Closing inference client", client_class=self.__class__.__name__)
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
