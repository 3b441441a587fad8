"""
Prediction data models.

PredictionRecord is the canonical item produced by the normalizer from an
untrusted inference payload; SentimentResult is what the interpreter derives
from a set of records for display.
"""

from pydantic import BaseModel, ConfigDict, Field

from sentiment_relay.models.enums import SentimentLabel


UNKNOWN_PREDICTION_LABEL = "unknown"


class PredictionRecord(BaseModel):
    """
    A single `{label, score}` pair after normalization.
    
    Both fields are always populated: missing or malformed values are
    replaced by "unknown" and 0 before the record is built.
    """
    
    model_config = ConfigDict(frozen=True)
    
    label: str = Field(
        ...,
        min_length=1,
        description="Raw model label (e.g. 'LABEL_2', 'positive')"
    )
    score: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="Model confidence for this label"
    )


class SentimentResult(BaseModel):
    """
    Top-scoring prediction mapped onto a display label.
    
    label is one of the canonical SentimentLabel values or, for labels the
    classifier does not recognize, the raw label with its first character
    upper-cased.
    """
    
    model_config = ConfigDict(frozen=True)
    
    label: str = Field(
        ...,
        min_length=1,
        examples=["Positive", "Negative", "Neutral", "Surprise"]
    )
    score: float = Field(
        default=0.0,
        allow_inf_nan=False,
        description="Score of the top record, unchanged by classification"
    )
    
    @property
    def is_canonical(self) -> bool:
        """True when label is Positive, Negative or Neutral."""
        return self.label in {
            SentimentLabel.POSITIVE.value,
            SentimentLabel.NEGATIVE.value,
            SentimentLabel.NEUTRAL.value,
        }
    
    @classmethod
    def unknown(cls) -> "SentimentResult":
        """Result used when there is nothing to interpret."""
        return cls(label=SentimentLabel.UNKNOWN.value, score=0.0)
