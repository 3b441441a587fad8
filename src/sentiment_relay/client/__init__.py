"""
Session client for the relay (the presentation side).

Components:
- RelayClient: calls POST /api/analyze, reports failures as None
- AnalysisSession: submit/interpret/history orchestration
- HistoryStore, HistoryEntry: in-memory session history
- rendering: score formatting, colors, previews, HTML escaping
- transcripts: speech-to-text input sources
"""

from sentiment_relay.client.history import HistoryEntry, HistoryStore
from sentiment_relay.client.relay_client import RelayClient
from sentiment_relay.client.rendering import (
    RenderedResult,
    escape_html,
    format_score,
    preview_text,
    render_history_entry,
    render_history_html,
    render_result,
    sentiment_color,
)
from sentiment_relay.client.session import (
    ANALYSIS_FAILED,
    AnalysisOutcome,
    AnalysisSession,
    SubmissionInProgressError,
)
from sentiment_relay.client.transcripts import (
    IterableTranscriptSource,
    TranscriptSource,
    append_transcript,
)

__all__ = [
    "RelayClient",
    "AnalysisSession",
    "AnalysisOutcome",
    "SubmissionInProgressError",
    "ANALYSIS_FAILED",
    "HistoryEntry",
    "HistoryStore",
    "RenderedResult",
    "render_result",
    "render_history_entry",
    "render_history_html",
    "format_score",
    "sentiment_color",
    "preview_text",
    "escape_html",
    "TranscriptSource",
    "IterableTranscriptSource",
    "append_transcript",
]
