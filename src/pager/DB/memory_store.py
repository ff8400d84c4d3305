# pager/DB/memory_store.py
from __future__ import annotations
from typing import Dict, Optional
from .api import ReadingStateStore
from ..models import ReadingState

class MemoryStore(ReadingStateStore):
    """Simple in-memory store (useful for tests or ephemeral runs)."""
    def __init__(self) -> None:
        self._rows: Dict[str, ReadingState] = {}

    def read(self, file: str) -> Optional[ReadingState]:
        return self._rows.get(file)

    def write(self, state: ReadingState) -> None:
        self._rows[state.file] = state

    def delete(self, file: str) -> None:
        self._rows.pop(file, None)

    def count(self) -> int:
        return len(self._rows)

    def close(self) -> None:
        self._rows.clear()
