"""
HTTP client for the relay's analyze endpoint.

Mirrors what the browser front-end does: any failure (error status, empty
body, network problem) is logged with its kind and reported as None, so the
caller only has to show a generic failure.
"""

from typing import Any, Optional

import httpx
import structlog

from sentiment_relay.core.normalizer import unwrap


logger = structlog.get_logger(__name__)


# Relay status codes with a known meaning, for diagnostics only
FAILURE_KINDS = {
    400: "invalid_input",
    429: "rate_limited",
    500: "server_error",
    504: "timeout",
}


class RelayClient:
    """Async client for POST /api/analyze on a running relay."""
    
    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8080",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
    
    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client
    
    async def analyze(self, text: str) -> Optional[Any]:
        """
        Send text to the relay.
        
        Returns:
            The payload with redundant list wrapping removed, or None if
            the relay could not produce one
        """
        try:
            client = await self._get_client()
            response = await client.post("/api/analyze", json={"text": text})
        except httpx.HTTPError as e:
            logger.error(
                "Network error calling relay",
                failure_kind="network",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
        
        try:
            raw = response.json()
        except ValueError:
            raw = None
        
        if not response.is_success:
            logger.error(
                "Relay returned non-OK",
                failure_kind=FAILURE_KINDS.get(response.status_code, "upstream_error"),
                status_code=response.status_code,
                body=raw,
            )
            return None
        if raw is None:
            logger.error("Relay returned empty/non-JSON response", failure_kind="empty_body")
            return None
        
        return unwrap(raw)
    
    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
