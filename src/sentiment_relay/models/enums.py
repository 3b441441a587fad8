"""
Enumerations for Sentiment Relay data models.
"""

from enum import Enum


class SentimentLabel(str, Enum):
    """
    Canonical sentiment categories shown to the user.
    
    UNKNOWN is only produced when there is no prediction to interpret.
    Unrecognized model labels are passed through capitalized instead of
    being forced into this set.
    """
    
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    UNKNOWN = "Unknown"
