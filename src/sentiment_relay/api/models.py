"""
API-specific request and response models for FastAPI endpoints.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictStr

from sentiment_relay.models.predictions import PredictionRecord, SentimentResult


class AnalyzeRequest(BaseModel):
    """Request body for the analyze endpoints."""
    
    text: StrictStr = Field(
        ...,
        min_length=1,
        description="Text to run sentiment inference on",
        examples=["I love this new feature!"]
    )


class SentimentResponse(BaseModel):
    """Response for the server-side normalized sentiment endpoint."""
    
    predictions: list[PredictionRecord] = Field(
        description="Normalized prediction records in payload order"
    )
    result: SentimentResult = Field(
        description="Top prediction mapped onto a display label"
    )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(
        description="Relay liveness",
        examples=["ok"]
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""
    
    error: Any = Field(
        description="Error message, or the upstream error body for passthrough errors",
        examples=["Invalid text", "HF request timeout", {"error": "Model is loading"}]
    )
    details: Optional[str] = Field(
        default=None,
        description="Failure message for transport-level errors"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error timestamp (UTC)"
    )
