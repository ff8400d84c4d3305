from __future__ import annotations
import base64
import binascii
import logging
import os
from typing import List, Optional

from . import config as CFG
from .config import Settings
from .normalize import collapse_blank_lines

log = logging.getLogger(__name__)


def _decode_base64(raw: str, path: str) -> str:
    """Undo the at-rest Base64 obfuscation; fall back to the raw text."""
    try:
        return base64.b64decode("".join(raw.split()), validate=True).decode("utf-8-sig")
    except (binascii.Error, UnicodeDecodeError) as e:
        log.warning("Base64 decode failed for %s (%s); using raw content", path, e)
        return raw


def read_text(path: str, *, encrypted: bool = False) -> str:
    """
    Read a UTF-8 text file for paging.
    encrypted=True: content is Base64 and gets decoded first.
    The result is trimmed and runs of 3+ newlines become one blank line.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    with open(path, "r", encoding="utf-8-sig", errors="replace") as f:
        raw = f.read()
    if encrypted:
        raw = _decode_base64(raw, path)
    return collapse_blank_lines(raw)


def expand_path(path: str, workspace: Optional[str]) -> Optional[str]:
    """Substitute ${workspaceFolder}; None if it is used but no workspace is known."""
    if CFG.WORKSPACE_VAR not in path:
        return path
    if not workspace:
        return None
    return path.replace(CFG.WORKSPACE_VAR, workspace)


def resolve_files(settings: Settings, workspace: Optional[str] = None) -> List[str]:
    """Primary file first, then the extra files list; duplicates and unresolvable entries dropped."""
    out: List[str] = []
    candidates = ([settings.file_path] if settings.file_path else []) + list(settings.files)
    for entry in candidates:
        if not entry or not entry.strip():
            continue
        resolved = expand_path(entry, workspace)
        if resolved is None:
            log.warning("Unresolved %s in %r (no workspace)", CFG.WORKSPACE_VAR, entry)
            continue
        if resolved not in out:
            out.append(resolved)
    return out
