# branchborder/colors.py
from __future__ import annotations

import re
from typing import Any, Dict, Optional, Tuple

_HEX6_RE = re.compile(r"^[0-9a-fA-F]{6}$")

HOVER_BACKGROUND_ALPHA = 0.12
HOVER_BORDER_ALPHA = 0.7

# Keys painted with the base color at full opacity.
BORDER_KEYS = (
    "window.activeBorder",
    "window.inactiveBorder",
    "activityBar.border",
    "sideBar.border",
    "panel.border",
    "editorGroup.border",
    "tab.activeBorderTop",
)
HOVER_BACKGROUND_KEYS = ("tab.hoverBackground", "tab.unfocusedHoverBackground")
HOVER_BORDER_KEYS = ("tab.hoverBorder", "tab.unfocusedHoverBorder")


def hex_to_rgb(value: Any) -> Optional[Tuple[int, int, int]]:
    """Parse "#RRGGBB" or "#RGB" into an (r, g, b) tuple; None if malformed."""
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not s.startswith("#"):
        return None
    s = s[1:]
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if not _HEX6_RE.match(s):
        return None
    num = int(s, 16)
    return ((num >> 16) & 255, (num >> 8) & 255, num & 255)


def with_alpha(color: str, alpha: float) -> str:
    rgb = hex_to_rgb(color)
    if rgb is None:
        return color
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def build_overrides(color: str) -> Dict[str, str]:
    hover_background = with_alpha(color, HOVER_BACKGROUND_ALPHA)
    hover_border = with_alpha(color, HOVER_BORDER_ALPHA)

    out: Dict[str, str] = {k: color for k in BORDER_KEYS}
    for k in HOVER_BACKGROUND_KEYS:
        out[k] = hover_background
    for k in HOVER_BORDER_KEYS:
        out[k] = hover_border
    return out


def theme_block_key(theme: Any) -> Optional[str]:
    if isinstance(theme, str) and theme.strip():
        return f"[{theme}]"
    return None


def merge_color_customizations(existing: Any, overrides: Dict[str, str], theme: Any = None) -> Dict[str, Any]:
    """Shallow-merge `overrides` over `existing` (and over its theme block).

    Unrelated keys survive at both levels. Non-dict inputs count as empty.
    """
    base = existing if isinstance(existing, dict) else {}
    merged: Dict[str, Any] = {**base, **overrides}

    key = theme_block_key(theme)
    if key:
        theme_existing = base.get(key)
        merged[key] = {**(theme_existing if isinstance(theme_existing, dict) else {}), **overrides}
    return merged


THICK_BORDER_CSS_TEMPLATE = """:root {
  --vscode-border-thickness: 4px;
  --vscode-border-color: __COLOR__;
}

.monaco-workbench,
#workbench {
  box-shadow: inset 0 0 0 var(--vscode-border-thickness) var(--vscode-border-color) !important;
  outline: none;
}
"""


def render_thick_border_css(color: str) -> str:
    return THICK_BORDER_CSS_TEMPLATE.replace("__COLOR__", color)
