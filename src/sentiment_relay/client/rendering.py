"""
Display helpers for analysis results and history entries.
"""

import html
import math
from typing import Any

from pydantic import BaseModel

from sentiment_relay.client.history import HistoryEntry
from sentiment_relay.models.predictions import SentimentResult


SENTIMENT_COLORS = {
    "positive": "#22c55e",
    "negative": "#ef4444",
    "neutral": "#facc15",
}
FALLBACK_COLOR = "#9ca3af"
NO_SCORE = "—"


class RenderedResult(BaseModel):
    """A SentimentResult prepared for display."""
    
    label: str
    score_text: str
    color: str
    
    def __str__(self) -> str:
        return f"Result: {self.label.upper()} ({self.score_text} confidence)"


def sentiment_color(label: Any) -> str:
    """Display color for a sentiment label (case-insensitive)."""
    return SENTIMENT_COLORS.get(str(label or "").lower(), FALLBACK_COLOR)


def format_score(score: Any) -> str:
    """
    Format a 0..1 score as a percentage with one decimal.
    
    Scores that are not finite numbers in [0, 1] render as an em dash.
    
    Examples:
        >>> format_score(0.875)
        '87.5%'
        >>> format_score(1.7)
        '—'
    """
    try:
        value = float(score)
    except (TypeError, ValueError):
        return NO_SCORE
    if not math.isfinite(value) or not 0 <= value <= 1:
        return NO_SCORE
    return f"{value * 100:.1f}%"


def preview_text(text: str, limit: int = 50) -> str:
    """Shorten text to `limit` characters, marking the cut with '...'."""
    return text[:limit] + "..." if len(text) > limit else text


def escape_html(value: Any) -> str:
    """Escape user-supplied text before it is embedded in HTML."""
    return html.escape(str(value), quote=True)


def render_result(result: SentimentResult) -> RenderedResult:
    label = result.label or "Unknown"
    return RenderedResult(
        label=label,
        score_text=format_score(result.score),
        color=sentiment_color(label),
    )


def render_history_entry(number: int, entry: HistoryEntry, preview_chars: int = 50) -> str:
    """Plain-text history line, e.g. `2. Ana: "great day" POSITIVE (98.1%)`."""
    return (
        f'{number}. {entry.name or "Unknown"}: "{preview_text(entry.text, preview_chars)}" '
        f'{(entry.sentiment or "Unknown").upper()} ({format_score(entry.score)})'
    )


def render_history_html(number: int, entry: HistoryEntry, preview_chars: int = 50) -> str:
    """HTML list item for a history entry; user-supplied text is escaped."""
    color = sentiment_color(entry.sentiment)
    return (
        "<li>"
        f'<strong class="history-number">{number}.</strong> '
        f"<strong>{escape_html(entry.name or 'Unknown')}</strong>: "
        f'<span>"{escape_html(preview_text(entry.text, preview_chars))}"</span><br>'
        f'<small style="color:{color};font-weight:bold;text-transform:uppercase;">'
        f"{escape_html(entry.sentiment or 'Unknown')} ({format_score(entry.score)})"
        "</small>"
        "</li>"
    )
