from __future__ import annotations
import re

# Any run of whitespace (spaces, tabs, newlines, unicode spaces, BOM)
_WS = re.compile(r"[\s\ufeff]+")


def normalize(text: str) -> str:
    """
    Collapse every whitespace run to a single space and trim both ends.
    The result is the coordinate space for all page and match offsets.
    """
    return _WS.sub(" ", text).strip()


def collapse_blank_lines(text: str) -> str:
    """Trim, and squeeze 3+ consecutive newlines into one blank line."""
    return re.sub(r"\n{3,}", "\n\n", text.strip())
