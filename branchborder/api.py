"""branchborder.api

Stable *library* entrypoint for branchborder.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from branchborder.applier import apply_color, write_thick_border_css
from branchborder.assign import color_for_branch, pick_color
from branchborder.colors import build_overrides, hex_to_rgb, merge_color_customizations, with_alpha
from branchborder.git import get_branch
from branchborder.gitignore import ensure_gitignore
from branchborder.palette import DEFAULT_COLORS, resolve_palette
from branchborder.settings import JsonSettings, SettingsError
from branchborder.state import BorderContext, BorderState, TRIGGERS, dispatch
from branchborder.store import STATE_KEY, StateStore, read_branch_map
from branchborder.thick_border import enable_thick_border
from branchborder.view import render_status
from branchborder.watch import run_watch

__all__ = [
    "DEFAULT_COLORS",
    "STATE_KEY",
    "TRIGGERS",
    "BorderContext",
    "BorderState",
    "JsonSettings",
    "SettingsError",
    "StateStore",
    "apply_color",
    "build_overrides",
    "color_for_branch",
    "dispatch",
    "enable_thick_border",
    "ensure_gitignore",
    "get_branch",
    "hex_to_rgb",
    "merge_color_customizations",
    "pick_color",
    "read_branch_map",
    "render_status",
    "resolve_palette",
    "run_watch",
    "with_alpha",
    "write_thick_border_css",
]
