# pager/session.py
from __future__ import annotations

import logging
import os
import time
from typing import List, Optional

from .boundaries import boundaries_from_pages
from .config import Settings
from .display import format_status
from .loader import read_text, resolve_files
from .models import Page, PageBoundary, ReadingState, SearchMatch, StatusLine
from .normalize import normalize
from .paginate import split_pages
from .search import search
from .DB.api import ReadingStateStore, make_store

log = logging.getLogger(__name__)


class ReaderSession:
    """
    Thin orchestration layer that owns all mutable reading state:
      - the configured file list and which file is open,
      - the current text, its pages and boundary table,
      - the current page and whether real content is shown,
      - a ReadingStateStore that remembers the page per file.

    Public API (used by CLI/Flask):
      * load(file_index): read file -> paginate -> restore cached page
      * reload():         recompute after the file changed on disk
      * show_real / next_page / previous_page / jump / switch_file
      * search(query), search_and_jump(query, choice)
      * status():         what a status line should show
      * close():          release the store
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        store: Optional[ReadingStateStore] = None,
        workspace: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        self.settings = (settings or Settings()).validate()
        self.workspace = workspace
        self._store = store if store is not None else make_store(self.settings.store_dsn)

        self.files: List[str] = []
        self.file_index: int = 0
        self.text: str = ""
        self.normalized: str = ""
        self.pages: List[Page] = []
        self.boundaries: List[PageBoundary] = []
        self.current_page: int = 0
        self.real: bool = False

    @property
    def loaded(self) -> bool:
        return bool(self.pages)

    @property
    def current_file(self) -> Optional[str]:
        if not self.files:
            return None
        return self.files[self.file_index]

    # /* ~~~ Read a file, paginate it and restore the cached page ~~~ */
    def load(self, file_index: Optional[int] = None) -> None:
        files = resolve_files(self.settings, self.workspace)
        if not files:
            raise RuntimeError("No file configured (set filePath or files)")

        if file_index is not None:
            index = max(0, min(int(file_index), len(files) - 1))
        elif self.file_index >= len(files):
            index = 0
        else:
            index = self.file_index

        path = files[index]
        log.info("Loading %s", path)
        # nothing is assigned until the read succeeds
        text = read_text(path, encrypted=self.settings.enable_encryption)
        normalized = normalize(text)
        pages = split_pages(normalized, self.settings.page_size)

        self.files, self.file_index = files, index
        self.text, self.normalized = text, normalized
        self.pages = pages
        self.boundaries = boundaries_from_pages(pages)

        page = 0
        if self.settings.enable_cache:
            cached = self._store.read(path)
            if cached is not None:
                page = cached.current_page
        self.current_page = self._clamp(page)
        self._save()
        log.info("Loaded %s: pages=%d current=%d", path, len(self.pages), self.current_page)

    def reload(self) -> None:
        """Re-read the open file, keeping the page where possible."""
        self._require_loaded()
        page = self.current_page
        self.load(self.file_index)
        self.current_page = self._clamp(page)
        self._save()

    def close(self) -> None:
        try:
            self._store.close()
        finally:
            self.pages = []
            self.boundaries = []
            log.info("Session closed")

    # ------------- navigation -------------

    def show_real(self, flag: bool = True) -> None:
        self.real = bool(flag)

    def next_page(self) -> bool:
        return self._step(+1)

    def previous_page(self) -> bool:
        return self._step(-1)

    def jump(self, page: int) -> int:
        """Go to page (clamped) and reveal the real content. Returns the page."""
        self._require_loaded()
        self.real = True
        self.current_page = self._clamp(page)
        self._save()
        return self.current_page

    def switch_file(self) -> bool:
        """Open the next configured file (wraps around). False if there is only one."""
        self._require_loaded()
        if len(self.files) <= 1:
            log.info("Only one file configured; nothing to switch to")
            return False
        self.load((self.file_index + 1) % len(self.files))
        log.info("Switched to %s", os.path.basename(self.files[self.file_index]))
        return True

    # ------------- search -------------

    def search(self, query: str, *, limit: Optional[int] = None) -> List[SearchMatch]:
        self._require_loaded()
        query = query.strip()
        if not query:
            return []
        contents = [p.content for p in self.pages]
        return search(self.normalized, query, contents, self.settings.page_size, limit=limit)

    def search_and_jump(self, query: str, choice: int = 0) -> Optional[SearchMatch]:
        """Search and jump to the page of match number `choice`; None if nothing matched."""
        matches = self.search(query)
        if not matches:
            return None
        if not 0 <= choice < len(matches):
            raise IndexError(f"choice {choice} out of range (0..{len(matches) - 1})")
        hit = matches[choice]
        self.jump(hit.page)
        return hit

    # ------------- display -------------

    def page_content(self, page: Optional[int] = None) -> str:
        self._require_loaded()
        idx = self.current_page if page is None else int(page)
        if not 0 <= idx < len(self.pages):
            raise IndexError(f"page {idx} out of range (0..{len(self.pages) - 1})")
        return self.pages[idx].content

    def status(self) -> StatusLine:
        self._require_loaded()
        total = len(self.pages)
        text = ""
        if self.real:
            text = format_status(
                self.page_content(),
                self.current_page,
                total,
                max_length=self.settings.max_display_length,
                show_page_info=self.settings.show_page_info,
            )
        return StatusLine(text=text, page=self.current_page, total=total, real=self.real)

    # ------------- internals -------------

    def _step(self, delta: int) -> bool:
        self._require_loaded()
        if not self.real:
            log.warning("Page change ignored: real content is hidden")
            return False
        self.current_page = self._clamp(self.current_page + delta)
        self._save()
        return True

    def _clamp(self, page: int) -> int:
        return max(0, min(int(page), len(self.pages) - 1))

    def _save(self) -> None:
        path = self.current_file
        if not self.settings.enable_cache or path is None:
            return
        self._store.write(ReadingState(file=path, current_page=self.current_page,
                                       updated_at=time.time()))

    def _require_loaded(self) -> None:
        if not self.pages:
            raise RuntimeError("Session not loaded. Call load() first.")
