"""
Speech-to-text input.

A TranscriptSource is activated with listen(), which yields the transcripts
recognized during that one activation and then ends. stop() ends the
current activation early. Transcripts only ever feed the text field; the
analysis pipeline does not know where text came from.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator

import structlog


logger = structlog.get_logger(__name__)


def append_transcript(current: str, transcript: str) -> str:
    """Append a transcript to existing text, separated by one space."""
    return f"{current} {transcript}" if current else transcript


class TranscriptSource(ABC):
    """One-shot-per-activation source of recognized speech."""
    
    def __init__(self):
        self._listening = False
    
    @property
    def listening(self) -> bool:
        return self._listening
    
    @abstractmethod
    def _recognize(self) -> Iterable[str]:
        """Produce the transcripts of a single activation, lazily."""
    
    def listen(self) -> Iterator[str]:
        """
        Start an activation and yield transcripts until it ends or stop()
        is called.
        """
        if self._listening:
            raise RuntimeError("Transcript source is already listening")
        
        self._listening = True
        logger.debug("Transcript source started", source=self.__class__.__name__)
        try:
            for transcript in self._recognize():
                if not self._listening:
                    break
                if transcript:
                    yield transcript
        finally:
            self._listening = False
            logger.debug("Transcript source stopped", source=self.__class__.__name__)
    
    def stop(self) -> None:
        """End the current activation; pending transcripts are dropped."""
        self._listening = False


class IterableTranscriptSource(TranscriptSource):
    """
    Transcript source backed by a factory of iterables.
    
    The factory is called once per activation, e.g. to read lines from a
    recognizer's output stream or from a prepared list.
    """
    
    def __init__(self, factory: Callable[[], Iterable[str]]):
        super().__init__()
        self._factory = factory
    
    def _recognize(self) -> Iterable[str]:
        return self._factory()
