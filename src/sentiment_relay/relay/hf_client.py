"""
Hugging Face inference client.

Communicates with the Hugging Face inference router using httpx AsyncClient.
Supports:
- Bearer-token authentication
- An overall per-request deadline (not just per-socket-operation timeouts)
- Upstream status/body passthrough as typed errors
- Connection pooling
"""

import asyncio
import json
import time
from typing import Any, Optional

import httpx
import structlog

from sentiment_relay.monitoring.metrics import upstream_latency_seconds
from sentiment_relay.relay.base_client import BaseInferenceClient
from sentiment_relay.relay.exceptions import (
    InvalidInputError,
    MisconfigurationError,
    NetworkFailureError,
    UpstreamError,
    UpstreamTimeoutError,
)


logger = structlog.get_logger(__name__)

MISSING_TOKEN_MESSAGE = "Server misconfigured: missing HF_TOKEN"
TIMEOUT_MESSAGE = "HF request timeout"
DEFAULT_UPSTREAM_ERROR = "HuggingFace error"


class HuggingFaceClient(BaseInferenceClient):
    """
    Hugging Face router client using httpx for async HTTP communication.
    
    API Endpoint:
    - POST /hf-inference/models/{model_id} with body {"inputs": "<text>"}
    
    The router answers text-classification models with either
    `[[{"label": ..., "score": ...}, ...]]` or `[{"label": ..., "score": ...}]`,
    and some pipelines with a bare object. The body is returned undecoded
    beyond JSON parsing; normalization happens in sentiment_relay.core.
    """
    
    def __init__(
        self,
        model_id: str,
        token: Optional[str],
        base_url: str = "https://router.huggingface.co/hf-inference/models",
        timeout: float = 25.0,
        preview_chars: int = 300,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Hugging Face client.
        
        Args:
            model_id: Model repository id (e.g. "cardiffnlp/twitter-roberta-base-sentiment-latest")
            token: API token; None defers the failure to request time
            base_url: Inference router models URL
            timeout: Overall deadline per request in seconds
            preview_chars: Length of the response preview written to logs
            connection_limits: httpx connection pool limits
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        super().__init__(base_url, timeout)
        
        self.model_id = model_id
        self._token = token
        self.preview_chars = preview_chars
        
        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )
        
        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport
        
        if not token:
            logger.warning("HF_TOKEN is not set, analyze requests will fail", model=model_id)
    
    @property
    def model_path(self) -> str:
        return f"/{self.model_id}"
    
    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                # Socket-level bound; the overall deadline is enforced in analyze()
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
                follow_redirects=True
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client
    
    def _preview(self, body: Any) -> str:
        try:
            rendered = json.dumps(body, default=str)
        except ValueError:
            rendered = repr(body)
        return rendered[:self.preview_chars]
    
    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decode a JSON body, returning None for empty or non-JSON bodies."""
        try:
            return response.json()
        except ValueError:
            return None
    
    async def analyze(self, text: str) -> list[Any]:
        """
        POST text to the model and return the decoded body.
        
        Request:
        {"inputs": "I love this!"}
        
        Response (typical):
        [[{"label": "positive", "score": 0.98}, {"label": "neutral", "score": 0.01}, ...]]
        """
        if not isinstance(text, str) or not text:
            raise InvalidInputError("Invalid text", details={"type": type(text).__name__})
        
        if not self._token:
            logger.error("Missing HF_TOKEN in environment")
            raise MisconfigurationError(MISSING_TOKEN_MESSAGE)
        
        start_time = time.perf_counter()
        client = await self._get_client()
        
        try:
            response = await asyncio.wait_for(
                client.post(
                    self.model_path,
                    json={"inputs": text},
                    headers={"Authorization": f"Bearer {self._token}"},
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            upstream_latency_seconds.labels(model=self.model_id, success="false").observe(
                time.perf_counter() - start_time
            )
            logger.warning(
                "Inference request timeout",
                model=self.model_id,
                timeout=self.timeout,
                error_type=type(e).__name__,
            )
            raise UpstreamTimeoutError(
                TIMEOUT_MESSAGE,
                details={"timeout": self.timeout, "model": self.model_id}
            ) from e
        except httpx.TransportError as e:
            upstream_latency_seconds.labels(model=self.model_id, success="false").observe(
                time.perf_counter() - start_time
            )
            logger.error(
                "Inference network error",
                model=self.model_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkFailureError(
                f"Network error: {str(e) or type(e).__name__}",
                details={"error_type": type(e).__name__}
            ) from e
        
        latency = time.perf_counter() - start_time
        raw = self._decode(response)
        
        logger.info(
            "Inference response received",
            model=self.model_id,
            status_code=response.status_code,
            latency_ms=int(latency * 1000),
            preview=self._preview(raw),
        )
        
        upstream_latency_seconds.labels(
            model=self.model_id, success="true" if response.is_success else "false"
        ).observe(latency)
        
        if not response.is_success:
            raise UpstreamError(
                f"Inference endpoint returned {response.status_code}",
                status_code=response.status_code,
                body=raw if raw is not None else DEFAULT_UPSTREAM_ERROR,
                details={"model": self.model_id},
            )
        
        return raw if isinstance(raw, list) else [raw]
    
    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Hugging Face client connection")
    
    async def __aenter__(self):
        """Async context manager entry."""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
