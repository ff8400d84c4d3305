# pager/DB/api.py
from __future__ import annotations
import os
from typing import Optional, Protocol

from ..models import ReadingState


class ReadingStateStore(Protocol):
    """Per-file "last read page" persistence."""
    def read(self, file: str) -> Optional[ReadingState]: ...
    def write(self, state: ReadingState) -> None: ...
    def delete(self, file: str) -> None: ...
    def count(self) -> int: ...
    def close(self) -> None: ...


def make_store(dsn: str) -> ReadingStateStore:
    """
    Factory:
      - sqlite:///path -> SQLiteStore (file and table created on demand)
      - memory://      -> MemoryStore
    """
    if dsn.startswith("sqlite:///"):
        path = dsn.removeprefix("sqlite:///")
        if not path:
            raise ValueError(f"Missing database path in DSN: {dsn}")
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        # Lazy imports avoid a circular import with the store modules
        from .sqlite_store import SQLiteStore
        return SQLiteStore(path)

    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore()

    raise ValueError(f"Unsupported store DSN: {dsn}")
