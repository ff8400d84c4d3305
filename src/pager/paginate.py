from __future__ import annotations
from typing import List

from . import config as CFG
from .models import Page
from .normalize import normalize


def _check_page_size(page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return page_size


def split_pages(text: str, page_size: int) -> List[Page]:
    """
    Walk the normalized text once and cut it into pages of ~page_size chars.

    A full-length page that is not the last one is shortened to end on its
    last space when that space lies past BREAK_RATIO of the page; the cursor
    then resumes right after the space. Otherwise the cut is a hard one.
    Each page is trimmed and keeps the exact [start, end) it occupies.

    Empty input gives a single empty page at (0, 0), never an empty list.
    """
    _check_page_size(page_size)
    norm = normalize(text)
    n = len(norm)
    if n == 0:
        return [Page(index=0, content="", start=0, end=0)]

    threshold = page_size * CFG.BREAK_RATIO
    pages: List[Page] = []
    i = 0
    while i < n:
        take = page_size
        if i + page_size < n:
            # full-length by construction here; look for a word break
            last_space = norm.rfind(" ", i, i + page_size) - i
            if last_space > threshold:
                take = last_space + 1

        raw = norm[i:i + take]
        content = raw.strip()
        if content:
            start = i + (len(raw) - len(raw.lstrip()))
            pages.append(Page(index=len(pages), content=content,
                              start=start, end=start + len(content)))
        # a lone space (page_size == 1) yields nothing
        i += take
    return pages


def paginate(text: str, page_size: int) -> List[str]:
    """Page contents only, in reading order."""
    return [p.content for p in split_pages(text, page_size)]
