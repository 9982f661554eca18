# branchborder/palette.py
from __future__ import annotations

import os
from typing import Any, List, Optional, Sequence

DEFAULT_COLORS: tuple[str, ...] = (
    "#E53935",
    "#D81B60",
    "#8E24AA",
    "#3949AB",
    "#1E88E5",
    "#039BE5",
    "#00897B",
    "#43A047",
    "#FDD835",
    "#FB8C00",
    "#F4511E",
)

PRIMARY_COLORS_KEY = "vscodeBorder.primaryColors"


def resolve_palette(configured: Any = None) -> List[str]:
    """Return the candidate colors for assignment.

    A user override list wins when it still has entries after dropping
    non-strings and blank strings; otherwise the built-in default is used.
    """
    if isinstance(configured, (list, tuple)):
        cleaned = [v for v in configured if isinstance(v, str) and v.strip()]
        if cleaned:
            return cleaned
    return list(DEFAULT_COLORS)


def parse_color_list(raw: Optional[str]) -> Optional[List[str]]:
    """Split a comma separated color list (CLI / env form). Empty -> None."""
    if raw is None:
        return None
    parts = [p.strip() for p in str(raw).split(",")]
    parts = [p for p in parts if p]
    return parts or None


def env_primary_colors() -> Optional[List[str]]:
    return parse_color_list(os.getenv("BRANCHBORDER_PRIMARY_COLORS"))


def palette_from_settings(settings_doc: Any, override: Optional[Sequence[str]] = None) -> List[str]:
    if override:
        return resolve_palette(list(override))
    configured = settings_doc.get(PRIMARY_COLORS_KEY) if isinstance(settings_doc, dict) else None
    return resolve_palette(configured)
