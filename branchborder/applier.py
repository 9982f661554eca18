# branchborder/applier.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .colors import build_overrides, merge_color_customizations, render_thick_border_css
from .settings import COLOR_CUSTOMIZATIONS_KEY, COLOR_THEME_KEY
from .util.console import eprint, obs


def default_css_path() -> Path:
    raw = (os.getenv("BRANCHBORDER_CSS_PATH", "") or "").strip()
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".branchborder" / "custom.css"


def write_thick_border_css(color: str, css_path: Union[str, Path]) -> bool:
    """Regenerate the thick-border stylesheet. Best effort: failures are logged, not raised."""
    path = Path(css_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(render_thick_border_css(color))
    except OSError as ex:
        eprint(f"[branchborder.applier] WARN: failed to update {path}: {ex}")
        return False
    return True


def apply_color(color: str, settings: Any, css_path: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    """Write the border overrides for `color` into `settings`, then mirror it to the stylesheet.

    `settings` needs `get(key)` and `update(key, value)`. Errors from the
    settings sink propagate; the stylesheet write never does.
    """
    overrides = build_overrides(color)
    existing = settings.get(COLOR_CUSTOMIZATIONS_KEY)
    theme = settings.get(COLOR_THEME_KEY)

    merged = merge_color_customizations(existing, overrides, theme)
    settings.update(COLOR_CUSTOMIZATIONS_KEY, merged)
    obs("applier", f"INFO: applied color={color} theme={theme!r}")

    write_thick_border_css(color, css_path if css_path is not None else default_css_path())
    return overrides
