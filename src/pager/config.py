from __future__ import annotations
import json
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

PAGE_SIZE: int = 50
MAX_DISPLAY_LENGTH: int = 50

# Search caps
MAX_SEARCH_RESULTS: int = 100
CONTEXT_CHARS: int = 30

# /* ~~~ only break on a space that sits in the last 30% of a page ~~~ */
BREAK_RATIO: float = 0.7

ENABLE_CACHE: bool = True
ENABLE_ENCRYPTION: bool = False
SHOW_PAGE_INFO: bool = False

CONFIG_FILENAME = "secret-status-bar.config.json"
WORKSPACE_VAR = "${workspaceFolder}"
DEFAULT_FILE = WORKSPACE_VAR + "/secret.txt"

# "memory://" or "sqlite:///path/to/state.sqlite"
STORE_DSN = "memory://"

# JSON key (camelCase, as written in the settings file) -> Settings attribute
_JSON_KEYS = {
    "filePath": "file_path",
    "files": "files",
    "pageSize": "page_size",
    "maxDisplayLength": "max_display_length",
    "enableCache": "enable_cache",
    "enableEncryption": "enable_encryption",
    "showPageInfo": "show_page_info",
    "storeDsn": "store_dsn",
}


@dataclass
class Settings:
    file_path: Optional[str] = DEFAULT_FILE
    files: List[str] = field(default_factory=list)
    page_size: int = PAGE_SIZE
    max_display_length: int = MAX_DISPLAY_LENGTH
    enable_cache: bool = ENABLE_CACHE
    enable_encryption: bool = ENABLE_ENCRYPTION
    show_page_info: bool = SHOW_PAGE_INFO
    store_dsn: str = STORE_DSN

    def validate(self) -> "Settings":
        """Coerce numeric fields to int (JSON may carry "20") and check ranges."""
        try:
            self.page_size = int(self.page_size)
            self.max_display_length = int(self.max_display_length)
        except (TypeError, ValueError):
            raise ValueError(
                f"page_size and max_display_length must be integers, "
                f"got {self.page_size!r} and {self.max_display_length!r}"
            ) from None
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        if self.max_display_length < 4:
            raise ValueError(f"max_display_length must be >= 4, got {self.max_display_length}")
        return self

    def replace(self, **overrides: Any) -> "Settings":
        """Copy with the non-None overrides applied (CLI flags win over the file)."""
        known = {f.name for f in fields(self)}
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if key not in known:
                raise ValueError(f"Unknown setting: {key}")
            if value is not None:
                data[key] = value
        return Settings(**data)


def _read_json_dict(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings root must be a JSON object: {path}")
    return data


def find_config(workspace: Optional[str]) -> Optional[str]:
    """Return the settings file inside workspace, if one exists."""
    if not workspace:
        return None
    path = os.path.join(workspace, CONFIG_FILENAME)
    return path if os.path.isfile(path) else None


def load_settings(path: Optional[str] = None, workspace: Optional[str] = None) -> Settings:
    """
    Build Settings from the defaults above, overlaid with a JSON settings file.
    Lookup: explicit path (must exist) > <workspace>/CONFIG_FILENAME > defaults.
    Unknown keys are ignored.
    """
    if path is not None:
        if not os.path.exists(path):
            raise FileNotFoundError(path)
    else:
        path = find_config(workspace)

    settings = Settings()
    if path is None:
        return settings

    raw = _read_json_dict(path)
    overrides = {attr: raw[key] for key, attr in _JSON_KEYS.items() if key in raw}
    if "files" in overrides and not isinstance(overrides["files"], list):
        raise ValueError(f"'files' must be a list in {path}")
    return settings.replace(**overrides).validate()
