"""
Pydantic data models for Sentiment Relay.

Includes:
- Enums (SentimentLabel)
- Prediction models (PredictionRecord, SentimentResult)
"""

from sentiment_relay.models.enums import SentimentLabel
from sentiment_relay.models.predictions import (
    UNKNOWN_PREDICTION_LABEL,
    PredictionRecord,
    SentimentResult,
)

__all__ = [
    "SentimentLabel",
    "PredictionRecord",
    "SentimentResult",
    "UNKNOWN_PREDICTION_LABEL",
]
