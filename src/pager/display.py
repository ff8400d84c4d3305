from __future__ import annotations

from . import config as CFG
from .normalize import normalize

_ELLIPSIS = "..."


def _shorten(text: str, limit: int) -> str:
    # cut to leave room for "...", backing up to a space in the last 30%
    cut = text[:max(0, limit - len(_ELLIPSIS))]
    last_space = cut.rfind(" ")
    if last_space > limit * CFG.BREAK_RATIO:
        cut = cut[:last_space]
    return cut + _ELLIPSIS


def truncate(text: str, max_length: int) -> str:
    """Normalize text and shorten it to at most max_length chars."""
    if max_length < len(_ELLIPSIS) + 1:
        raise ValueError(f"max_length must be >= 4, got {max_length}")
    out = normalize(text)
    if len(out) > max_length:
        out = _shorten(out, max_length)
    return out


def page_indicator(page: int, total: int) -> str:
    return f" [{page + 1}/{total}]"


def format_status(
    content: str,
    page: int,
    total: int,
    max_length: int = CFG.MAX_DISPLAY_LENGTH,
    show_page_info: bool = CFG.SHOW_PAGE_INFO,
) -> str:
    """
    Status-line text for one page. With show_page_info and more than one
    page, a ' [n/N]' suffix is added and the text is shortened again so
    that text plus suffix fit in max_length where possible.
    """
    text = truncate(content, max_length)
    if total <= 1 or not show_page_info:
        return text

    info = page_indicator(page, total)
    available = max_length - len(info)
    if len(text) > available:
        text = _shorten(text, available)
    return text + info
