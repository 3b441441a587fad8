"""
Response normalization and sentiment interpretation.

Both modules are pure: no I/O, no shared state, safe from any thread.
"""

from sentiment_relay.core.interpreter import (
    analyze_payload,
    classify_label,
    interpret,
    select_top,
)
from sentiment_relay.core.normalizer import coerce_score, normalize, sanitize_item, unwrap

__all__ = [
    "normalize",
    "unwrap",
    "sanitize_item",
    "coerce_score",
    "interpret",
    "select_top",
    "classify_label",
    "analyze_payload",
]
