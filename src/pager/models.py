from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Page:
    index: int                # 0-based position in the page sequence
    content: str              # trimmed page text
    start: int                # offset into the normalized text (inclusive)
    end: int                  # offset into the normalized text (exclusive)


@dataclass(frozen=True)
class PageBoundary:
    start: int
    end: int

    def __contains__(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass(frozen=True)
class SearchMatch:
    index: int                # offset of the match in the normalized text
    page: int                 # 0-based page holding the match
    context: str              # excerpt around the match, "..." where clipped


@dataclass(frozen=True)
class ReadingState:
    file: str
    current_page: int
    updated_at: float         # time.time() of the last save


@dataclass(frozen=True)
class StatusLine:
    text: str
    page: int
    total: int
    real: bool                # False while the real content is hidden
