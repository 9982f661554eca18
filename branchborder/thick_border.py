# branchborder/thick_border.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .settings import SettingsError
from .util.console import eprint

COMPANION_EXTENSION_ID = "be5invis.vscode-custom-css"
IMPORTS_KEY = "vscode_custom_css.imports"
POLICY_KEY = "vscode_custom_css.policy"


def default_extensions_dir() -> Path:
    raw = (os.getenv("BRANCHBORDER_EXTENSIONS_DIR", "") or "").strip()
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".vscode" / "extensions"


def companion_installed(extensions_dir: Union[str, Path]) -> bool:
    """True if an extension folder like `be5invis.vscode-custom-css-7.4.2` exists."""
    base = Path(extensions_dir)
    if not base.is_dir():
        return False
    prefix = COMPANION_EXTENSION_ID.lower()
    for p in base.iterdir():
        name = p.name.lower()
        if not p.is_dir():
            continue
        if name == prefix or (name.startswith(prefix + "-") and name[len(prefix) + 1 : len(prefix) + 2].isdigit()):
            return True
    return False


def _warn(msg: str) -> None:
    eprint(f"[branchborder] WARN: {msg}")


def _info(msg: str) -> None:
    eprint(f"[branchborder] INFO: {msg}")


def enable_thick_border(
    css_path: Union[str, Path],
    user_settings: Any,
    extensions_dir: Optional[Union[str, Path]] = None,
    *,
    warn: Callable[[str], None] = _warn,
    info: Callable[[str], None] = _info,
) -> bool:
    """Point the custom CSS loader extension at our generated stylesheet."""
    ext_dir = Path(extensions_dir) if extensions_dir is not None else default_extensions_dir()
    if not companion_installed(ext_dir):
        warn(
            'Thick border requires the "Custom CSS and JS Loader" extension. '
            f"Install it first: code --install-extension {COMPANION_EXTENSION_ID}"
        )
        return False

    css_uri = Path(css_path).expanduser().resolve().as_uri()
    try:
        existing = user_settings.get(IMPORTS_KEY)
        imports = list(existing) if isinstance(existing, list) else []
        if css_uri not in imports:
            imports.append(css_uri)
        user_settings.update(IMPORTS_KEY, imports)
        user_settings.update(POLICY_KEY, True)
    except (OSError, SettingsError) as ex:
        warn(f"Failed to update custom CSS settings: {ex}")
        return False

    info('Custom CSS path set. Run "Reload Custom CSS and JS" from the Command Palette.')
    return True
