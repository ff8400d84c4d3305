from __future__ import annotations
from typing import List, Sequence

from .models import Page, PageBoundary
from .paginate import _check_page_size


def boundaries_from_pages(pages: Sequence[Page]) -> List[PageBoundary]:
    """Exact table, straight from the offsets split_pages() recorded."""
    return [PageBoundary(p.start, p.end) for p in pages]


def build_boundaries(pages: Sequence[str], normalized: str, page_size: int) -> List[PageBoundary]:
    """
    Rebuild [start, end) for each page string by re-finding it in the text.

    The search resumes where the previous page ended. An empty page sits at
    the previous end. A page that cannot be found is placed at its nominal
    position (index * page_size), both ends clipped to the text.

    Known limitation: with repeated content a page may attach to an earlier
    copy than the one it was cut from. Callers that still hold the Page
    objects should use boundaries_from_pages() instead.
    """
    _check_page_size(page_size)
    out: List[PageBoundary] = []
    cursor = 0

    for i, page in enumerate(pages):
        content = page.strip()
        if not content:
            last_end = out[-1].end if out else 0
            out.append(PageBoundary(last_end, last_end))
            continue

        k = normalized.find(content, cursor)
        if k >= 0:
            out.append(PageBoundary(k, k + len(content)))
            cursor = k + len(content)
        else:
            start = min(i * page_size, len(normalized))
            end = min(start + len(content), len(normalized))
            out.append(PageBoundary(start, end))
            cursor = end
    return out


def page_for_position(offset: int, boundaries: Sequence[PageBoundary]) -> int:
    """
    Index of the first boundary holding offset. Offsets past every range
    clamp to the last page; an empty table gives 0.
    """
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    for i, b in enumerate(boundaries):
        if b.start <= offset < b.end:
            return i
    return max(0, len(boundaries) - 1)
