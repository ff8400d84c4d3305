"""Public API for the status-bar pager (one process-wide session)."""
from __future__ import annotations
from typing import List, Optional

from pager.config import Settings, load_settings
from pager.models import SearchMatch, StatusLine
from pager.session import ReaderSession

_session: ReaderSession | None = None


def initialize(settings: Optional[Settings] = None,
               config: Optional[str] = None,
               workspace: Optional[str] = None,
               file: Optional[str] = None,
               page_size: Optional[int] = None,
               db: Optional[str] = None,
               verbose: bool = False) -> ReaderSession:
    """
    Settings precedence: explicit arguments > config file > defaults.
    Any previous session is closed first.
    """
    global _session
    if settings is None:
        settings = load_settings(config, workspace=workspace)
    settings = settings.replace(file_path=file, page_size=page_size, store_dsn=db).validate()

    shutdown()
    sess = ReaderSession(settings, workspace=workspace, verbose=verbose)
    sess.load()
    _session = sess
    return sess


def session() -> ReaderSession:
    if _session is None:
        raise RuntimeError("Pager not initialized. Call initialize(...) first.")
    return _session


def status() -> StatusLine:
    return session().status()


def search(query: str) -> List[SearchMatch]:
    return session().search(query)


def shutdown() -> None:
    global _session
    if _session is not None:
        try:
            _session.close()
        finally:
            _session = None
