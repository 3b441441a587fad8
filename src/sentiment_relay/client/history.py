"""
Session-local analysis history.

Entries live in memory only and are lost with the session. The newest entry
is listed first and carries the highest display number; numbers are derived
from position, so they are renumbered on every add/remove.
"""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field


class HistoryEntry(BaseModel):
    """One past analysis."""
    
    model_config = ConfigDict(frozen=True)
    
    name: str = Field(..., description="Display name of the submitter")
    text: str = Field(..., description="Analyzed text (full, not truncated)")
    sentiment: str = Field(..., description="Interpreted label")
    score: float = Field(default=0.0, description="Top prediction score")


class HistoryStore:
    """Ordered, user-editable history (newest first)."""
    
    def __init__(self):
        self._entries: list[HistoryEntry] = []
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)
    
    @property
    def is_empty(self) -> bool:
        return not self._entries
    
    def add(self, entry: HistoryEntry) -> int:
        """Prepend an entry and return its display number."""
        self._entries.insert(0, entry)
        return len(self._entries)
    
    def remove(self, number: int) -> HistoryEntry:
        """
        Delete the entry shown with `number`.
        
        Raises:
            IndexError: No entry carries that number
        """
        index = len(self._entries) - number
        if number < 1 or index < 0:
            raise IndexError(f"No history entry numbered {number}")
        return self._entries.pop(index)
    
    def clear(self) -> int:
        """Delete every entry, returning how many were removed."""
        removed = len(self._entries)
        self._entries.clear()
        return removed
    
    def list_entries(self) -> list[tuple[int, HistoryEntry]]:
        """Entries with their display numbers, newest first."""
        total = len(self._entries)
        return [(total - index, entry) for index, entry in enumerate(self._entries)]
