# branchborder/settings.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .store import write_json_atomic

COLOR_CUSTOMIZATIONS_KEY = "workbench.colorCustomizations"
COLOR_THEME_KEY = "workbench.colorTheme"

JsonPath = Union[str, Path]


class SettingsError(Exception):
    """Settings document exists but cannot be used (unreadable or not a JSON object)."""


def default_settings_path(workspace: JsonPath) -> Path:
    raw = (os.getenv("BRANCHBORDER_SETTINGS_FILE", "") or "").strip()
    if raw:
        return Path(raw).expanduser()
    return Path(workspace) / ".vscode" / "settings.json"


def default_user_settings_path() -> Path:
    raw = (os.getenv("BRANCHBORDER_USER_SETTINGS_FILE", "") or "").strip()
    if raw:
        return Path(raw).expanduser()
    xdg = (os.getenv("XDG_CONFIG_HOME", "") or "").strip()
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / "Code" / "User" / "settings.json"


class JsonSettings:
    """A flat-keyed JSON settings document (`"workbench.colorTheme": ...`).

    Every read goes to disk. A missing file reads as an empty document and is
    created on first update. A file that is not a JSON object raises
    SettingsError and is never overwritten.
    """

    def __init__(self, path: JsonPath) -> None:
        self.path = Path(path)
        self.writes = 0

    def read(self) -> Dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as ex:
            raise SettingsError(f"cannot read {self.path}: {ex}") from ex
        if not text.strip():
            return {}
        try:
            doc = json.loads(text)
        except ValueError as ex:
            raise SettingsError(f"{self.path} is not valid JSON: {ex}") from ex
        if not isinstance(doc, dict):
            raise SettingsError(f"{self.path} does not contain a JSON object")
        return doc

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self.read().get(key, default)

    def update(self, key: str, value: Any) -> None:
        doc = self.read()
        doc[key] = value
        write_json_atomic(self.path, doc, sort_keys=False)
        self.writes += 1
