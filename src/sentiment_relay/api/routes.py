"""
Relay API routes.

- POST /api/analyze:   forward text, return the raw inference payload
- POST /api/sentiment: forward text, return normalized records + interpreted result
- GET  /health:        liveness probe
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, status

from sentiment_relay.api.dependencies import get_inference_client
from sentiment_relay.api.models import (
    AnalyzeRequest,
    ErrorResponse,
    HealthResponse,
    SentimentResponse,
)
from sentiment_relay.core.interpreter import interpret
from sentiment_relay.core.normalizer import normalize
from sentiment_relay.models.enums import SentimentLabel
from sentiment_relay.models.predictions import SentimentResult
from sentiment_relay.monitoring.metrics import relay_requests_total, sentiment_labels_total
from sentiment_relay.relay.base_client import BaseInferenceClient
from sentiment_relay.relay.exceptions import (
    InvalidInputError,
    MisconfigurationError,
    RelayError,
    UpstreamError,
    UpstreamTimeoutError,
)

logger = structlog.get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing, empty or non-string text"},
    429: {"description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Relay misconfigured or network failure"},
    504: {"model": ErrorResponse, "description": "Inference endpoint timed out"},
}


def _outcome(exc: RelayError) -> str:
    """Metric label for a failed relay request."""
    if isinstance(exc, InvalidInputError):
        return "invalid_input"
    if isinstance(exc, MisconfigurationError):
        return "misconfigured"
    if isinstance(exc, UpstreamTimeoutError):
        return "timeout"
    if isinstance(exc, UpstreamError):
        return "upstream_error"
    return "network_error"


def _label_metric(result: SentimentResult) -> str:
    if result.is_canonical or result.label == SentimentLabel.UNKNOWN.value:
        return result.label
    return "other"


async def _forward(endpoint: str, text: str, client: BaseInferenceClient) -> list[Any]:
    try:
        raw = await client.analyze(text)
    except RelayError as exc:
        relay_requests_total.labels(endpoint=endpoint, status=_outcome(exc)).inc()
        # Re-raise for exception handlers
        raise
    
    relay_requests_total.labels(endpoint=endpoint, status="success").inc()
    return raw


@router.post(
    "/api/analyze",
    status_code=status.HTTP_200_OK,
    summary="Run sentiment inference (raw payload)",
    description="""
    Forward text to the inference endpoint and return its body.
    
    The body is passed through as received, except that a bare object is
    wrapped in a one-element list. Upstream error statuses are forwarded
    with the upstream body under `error`.
    """,
    responses=ERROR_RESPONSES,
)
async def analyze(
    request: AnalyzeRequest,
    client: BaseInferenceClient = Depends(get_inference_client),
) -> list[Any]:
    """
    Relay text to the inference endpoint.
    
    Args:
        request: AnalyzeRequest with the text to analyze
        client: Inference client (injected)
    
    Returns:
        Raw prediction payload
    """
    logger.info("Analyze request received", text_length=len(request.text))
    return await _forward("analyze", request.text, client)


@router.post(
    "/api/sentiment",
    response_model=SentimentResponse,
    status_code=status.HTTP_200_OK,
    summary="Run sentiment inference (interpreted)",
    description="""
    Same as POST /api/analyze, but the payload is normalized into
    `{label, score}` records and the top record is mapped onto
    Positive / Negative / Neutral before returning.
    """,
    responses=ERROR_RESPONSES,
)
async def sentiment(
    request: AnalyzeRequest,
    client: BaseInferenceClient = Depends(get_inference_client),
) -> SentimentResponse:
    """
    Relay text and interpret the result server-side.
    
    Args:
        request: AnalyzeRequest with the text to analyze
        client: Inference client (injected)
    
    Returns:
        SentimentResponse with normalized predictions and the top result
    """
    logger.info("Sentiment request received", text_length=len(request.text))
    raw = await _forward("sentiment", request.text, client)
    
    predictions = normalize(raw)
    result = interpret(predictions)
    
    sentiment_labels_total.labels(label=_label_metric(result)).inc()
    
    logger.info(
        "Sentiment interpreted",
        label=result.label,
        score=result.score,
        predictions=len(predictions),
    )
    
    return SentimentResponse(predictions=predictions, result=result)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    """Liveness probe; does not call the inference endpoint."""
    return HealthResponse(status="ok")
