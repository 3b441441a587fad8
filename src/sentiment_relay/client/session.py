"""
Interactive analysis session.

Holds all mutable per-user state (history, in-flight flag) behind an
explicit interface; the pure core is called with data only.
"""

from typing import Optional

import structlog
from pydantic import BaseModel

from sentiment_relay.client.history import HistoryEntry, HistoryStore
from sentiment_relay.client.relay_client import RelayClient
from sentiment_relay.client.rendering import (
    RenderedResult,
    render_history_entry,
    render_history_html,
    render_result,
)
from sentiment_relay.client.transcripts import TranscriptSource, append_transcript
from sentiment_relay.config import Settings
from sentiment_relay.core.interpreter import interpret
from sentiment_relay.core.normalizer import normalize
from sentiment_relay.models.predictions import SentimentResult
from sentiment_relay.relay.exceptions import InvalidInputError


logger = structlog.get_logger(__name__)


ANALYSIS_FAILED = "Analysis failed."
MISSING_INPUT = "Please enter both a name and some text."


class SubmissionInProgressError(RuntimeError):
    """Raised when submit() is called while a previous submission is running."""


class AnalysisOutcome(BaseModel):
    """What the UI shows after a submission."""
    
    ok: bool
    message: str
    result: Optional[SentimentResult] = None
    rendered: Optional[RenderedResult] = None
    history_number: Optional[int] = None


class AnalysisSession:
    """
    One user's session: submits text through the relay, interprets the
    prediction and keeps the history of past analyses.
    """
    
    def __init__(
        self,
        relay: RelayClient,
        history: Optional[HistoryStore] = None,
        preview_chars: int = 50,
    ):
        self.relay = relay
        self.preview_chars = preview_chars
        self.history = history if history is not None else HistoryStore()
        self._in_flight = False
    
    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisSession":
        return cls(
            RelayClient(base_url=settings.RELAY_URL, timeout=settings.CLIENT_TIMEOUT),
            preview_chars=settings.HISTORY_PREVIEW_CHARS,
        )
    
    @property
    def busy(self) -> bool:
        return self._in_flight
    
    async def submit(self, name: str, text: str) -> AnalysisOutcome:
        """
        Analyze text on behalf of name.
        
        Raises:
            InvalidInputError: name or text is blank
            SubmissionInProgressError: a submission is already running
        """
        name = (name or "").strip()
        text = (text or "").strip()
        if not name or not text:
            raise InvalidInputError(MISSING_INPUT)
        if self._in_flight:
            raise SubmissionInProgressError("A submission is already in progress")
        
        self._in_flight = True
        try:
            prediction = await self.relay.analyze(text)
        finally:
            self._in_flight = False
        
        if prediction is None:
            return AnalysisOutcome(ok=False, message=ANALYSIS_FAILED)
        
        result = interpret(normalize(prediction))
        rendered = render_result(result)
        number = self.history.add(
            HistoryEntry(name=name, text=text, sentiment=result.label, score=result.score)
        )
        
        logger.info("Analysis completed", label=result.label, score=result.score)
        
        return AnalysisOutcome(
            ok=True,
            message=str(rendered),
            result=result,
            rendered=rendered,
            history_number=number,
        )
    
    def delete_entry(self, number: int) -> HistoryEntry:
        return self.history.remove(number)
    
    def clear_history(self) -> int:
        return self.history.clear()
    
    def history_lines(self) -> list[str]:
        """History as plain-text lines, newest first."""
        return [
            render_history_entry(number, entry, self.preview_chars)
            for number, entry in self.history.list_entries()
        ]
    
    def history_html(self) -> str:
        """History as an HTML <ol> fragment, newest first."""
        items = "".join(
            render_history_html(number, entry, self.preview_chars)
            for number, entry in self.history.list_entries()
        )
        return f"<ol class=\"history\">{items}</ol>"
    
    def dictate(self, source: TranscriptSource, current_text: str = "") -> str:
        """Run one speech activation and return the text with transcripts appended."""
        text = current_text
        for transcript in source.listen():
            text = append_transcript(text, transcript)
        return text
    
    async def close(self):
        await self.relay.close()
