from __future__ import annotations
import re
from typing import List, Optional, Sequence

from . import config as CFG
from .boundaries import build_boundaries, page_for_position
from .models import SearchMatch


def _context(text: str, start: int, end: int, width: int) -> str:
    """Up to `width` chars either side of [start, end), '...' where clipped."""
    lo = max(0, start - width)
    hi = min(len(text), end + width)
    out = text[lo:hi]
    if lo > 0:
        out = "..." + out
    if hi < len(text):
        out = out + "..."
    return out


def _compile_literal(query: str) -> re.Pattern:
    return re.compile(re.escape(query), re.IGNORECASE)


def search(
    normalized: str,
    query: str,
    pages: Sequence[str],
    page_size: int,
    *,
    limit: Optional[int] = None,
) -> List[SearchMatch]:
    """
    Case-insensitive literal search over the normalized text.

    Metacharacters in query are matched as themselves. Matches are found
    left to right without overlap; each is mapped to its page through a
    boundary table built once per call. At most `limit` matches are
    returned (MAX_SEARCH_RESULTS by default), extra ones are dropped.
    """
    if not query or not query.strip():
        return []

    cap = CFG.MAX_SEARCH_RESULTS if limit is None else int(limit)
    width = CFG.CONTEXT_CHARS
    boundaries = build_boundaries(pages, normalized, page_size)
    pat = _compile_literal(query)

    matches: List[SearchMatch] = []
    for m in pat.finditer(normalized):
        if len(matches) >= cap:
            break
        start, end = m.span()
        matches.append(SearchMatch(
            index=start,
            page=page_for_position(start, boundaries),
            context=_context(normalized, start, end, width),
        ))
    return matches
