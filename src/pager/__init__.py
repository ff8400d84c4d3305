"""
Status-bar pager core.

Cuts a text into small pages for a one-line reader and maps offsets back
to pages:

    normalize(text)                          -> whitespace-collapsed text
    paginate(text, page_size)                -> list of page strings
    split_pages(text, page_size)             -> list of Page with offsets
    build_boundaries(pages, text, page_size) -> list of PageBoundary
    page_for_position(offset, boundaries)    -> page index
    search(text, query, pages, page_size)    -> list of SearchMatch

All of the above are pure. ReaderSession holds the mutable reading state
(open file, current page, reveal flag) for the CLI and web surfaces.

Example Usage:
    from pager import normalize, paginate, search

    text = normalize(open("book.txt", encoding="utf-8").read())
    pages = paginate(text, 50)
    for m in search(text, "whale", pages, 50):
        print(m.page, m.context)
"""

# src/pager/__init__.py
from .normalize import normalize
from .paginate import paginate, split_pages
from .boundaries import build_boundaries, boundaries_from_pages, page_for_position
from .search import search
from .models import Page, PageBoundary, SearchMatch, ReadingState, StatusLine
from .session import ReaderSession

__version__ = "1.0.0"
__all__ = [
    "normalize", "paginate", "split_pages",
    "build_boundaries", "boundaries_from_pages", "page_for_position",
    "search", "ReaderSession",
    "Page", "PageBoundary", "SearchMatch", "ReadingState", "StatusLine",
]
