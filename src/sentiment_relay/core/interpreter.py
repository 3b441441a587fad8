"""
Sentiment interpreter.

Picks the top-scoring prediction and maps its raw model label onto a
display category. Models on the inference router use two label conventions:

- index labels: `LABEL_0` (negative), `LABEL_1` (neutral), `LABEL_2` (positive)
- named labels: `negative`, `NEU`, `POSITIVE`, ...

Anything else is shown as-is with its first character upper-cased.
"""

from collections.abc import Sequence
from typing import Any

from sentiment_relay.core.normalizer import normalize, sanitize_item
from sentiment_relay.models.enums import SentimentLabel
from sentiment_relay.models.predictions import PredictionRecord, SentimentResult


INDEX_LABEL_PREFIX = "label_"

# Checked in order, first match wins
INDEX_LABEL_RULES: tuple[tuple[str, SentimentLabel], ...] = (
    ("0", SentimentLabel.NEGATIVE),
    ("1", SentimentLabel.NEUTRAL),
    ("2", SentimentLabel.POSITIVE),
)

NAMED_LABEL_RULES: tuple[tuple[str, SentimentLabel], ...] = (
    ("neg", SentimentLabel.NEGATIVE),
    ("neu", SentimentLabel.NEUTRAL),
    ("pos", SentimentLabel.POSITIVE),
)


def select_top(records: Sequence[PredictionRecord]) -> PredictionRecord:
    """
    Return the record with the highest score.
    
    Equal scores resolve to the earliest record, which is what a stable
    descending sort would place first. The input is not modified.
    """
    return sorted(records, key=lambda record: record.score, reverse=True)[0]


def classify_label(label: str) -> str:
    """
    Map a raw model label onto a display label.
    
    Examples:
        >>> classify_label("LABEL_2")
        'Positive'
        >>> classify_label("NEGATIVE")
        'Negative'
        >>> classify_label("surprise")
        'Surprise'
    """
    lowered = label.lower()
    
    if lowered.startswith(INDEX_LABEL_PREFIX):
        for marker, sentiment in INDEX_LABEL_RULES:
            if marker in lowered:
                return sentiment.value
        # No index digit: fall through to the named conventions
    
    for marker, sentiment in NAMED_LABEL_RULES:
        if marker in lowered:
            return sentiment.value
    
    return label[:1].upper() + label[1:]


def interpret(records: Any) -> SentimentResult:
    """
    Derive the displayable sentiment from normalized prediction records.
    
    Args:
        records: Output of normalize(). Items that are not PredictionRecord
            are sanitized first; a non-sequence or empty input yields
            `Unknown` with score 0.
    
    Returns:
        SentimentResult carrying the classified label and the top score
    """
    if not isinstance(records, (list, tuple)) or not records:
        return SentimentResult.unknown()
    
    candidates = [
        record if isinstance(record, PredictionRecord) else sanitize_item(record)
        for record in records
    ]
    top = select_top(candidates)
    label = classify_label(top.label)
    
    return SentimentResult(label=label, score=top.score)


def analyze_payload(raw: Any) -> SentimentResult:
    """Normalize a raw inference payload and interpret it in one step."""
    return interpret(normalize(raw))
