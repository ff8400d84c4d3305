# pager/DB/sqlite_store.py
from __future__ import annotations
import sqlite3
from typing import Optional
from .api import ReadingStateStore
from ..models import ReadingState

_SCHEMA = """
CREATE TABLE IF NOT EXISTS reading_state (
  file TEXT PRIMARY KEY,
  current_page INTEGER NOT NULL,
  updated_at REAL NOT NULL
);
"""

class SQLiteStore(ReadingStateStore):
    """Reading positions in a single SQLite table, one row per file."""
    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self.conn: sqlite3.Connection = sqlite3.connect(db_path)
        self.conn.executescript(_SCHEMA)

    def read(self, file: str) -> Optional[ReadingState]:
        row = self.conn.execute(
            "SELECT file, current_page, updated_at FROM reading_state WHERE file=?",
            (file,),
        ).fetchone()
        if row is None:
            return None
        return ReadingState(file=row[0], current_page=int(row[1]), updated_at=float(row[2]))

    def write(self, state: ReadingState) -> None:
        self.conn.execute(
            "INSERT OR REPLACE INTO reading_state(file, current_page, updated_at) VALUES (?,?,?)",
            (state.file, int(state.current_page), float(state.updated_at)),
        )
        self.conn.commit()

    def delete(self, file: str) -> None:
        self.conn.execute("DELETE FROM reading_state WHERE file=?", (file,))
        self.conn.commit()

    def count(self) -> int:
        return int(self.conn.execute("SELECT COUNT(*) FROM reading_state").fetchone()[0])

    def close(self) -> None:
        self.conn.close()
