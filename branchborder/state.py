# branchborder/state.py
from __future__ import annotations

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence, Union

from .applier import apply_color
from .assign import color_for_branch
from .git import get_branch
from .palette import palette_from_settings
from .settings import SettingsError
from .store import read_branch_map
from .util.console import eprint, obs

NO_WORKSPACE = "NoWorkspace"
NO_BRANCH = "NoBranch"
STABLE = "Stable"

MSG_NO_WORKSPACE = "open a workspace to set a branch color."
MSG_NO_BRANCH = "could not determine git branch."


@dataclass
class BorderState:
    branch: Optional[str] = None
    color: Optional[str] = None

    def clear(self) -> None:
        self.branch = None
        self.color = None


def _default_notify(msg: str) -> None:
    eprint(f"[branchborder] INFO: {msg}")


def first_workspace_root(roots: Sequence[Union[str, Path, None]]) -> Optional[str]:
    """Return the first configured root if it is an existing directory."""
    for r in roots:
        if not r:
            continue
        p = Path(r).expanduser()
        return str(p) if p.is_dir() else None
    return None


@dataclass
class BorderContext:
    """Everything one refresh cycle touches. Owned by the caller, passed by reference."""

    store: Any
    settings: Any
    workspace: Callable[[], Optional[str]]
    css_path: Optional[Union[str, Path]] = None
    palette_override: Optional[Sequence[str]] = None
    branch_provider: Callable[[str], Optional[str]] = get_branch
    notify: Callable[[str], None] = _default_notify
    on_refresh: Optional[Callable[[BorderState], None]] = None
    rng: Optional[random.Random] = None
    state: BorderState = field(default_factory=BorderState)

    def refresh_view(self) -> None:
        if self.on_refresh is not None:
            self.on_refresh(self.state)

    def palette(self) -> list:
        try:
            doc = self.settings.read()
        except SettingsError as ex:
            eprint(f"[branchborder.state] WARN: {ex}; using default palette")
            doc = {}
        return palette_from_settings(doc, self.palette_override)


def _assign_and_apply(ctx: BorderContext, branch: str, *, force_new: bool) -> str:
    color = color_for_branch(
        ctx.store,
        branch,
        force_new,
        ctx.state.color,
        palette=ctx.palette(),
        rng=ctx.rng,
    )
    ctx.state.branch = branch
    ctx.state.color = color
    apply_color(color, ctx.settings, ctx.css_path)
    ctx.refresh_view()
    return color


def on_tick(ctx: BorderContext) -> str:
    """Periodic refresh. Returns the resulting phase name."""
    root = ctx.workspace()
    if not root:
        ctx.state.clear()
        ctx.refresh_view()
        return NO_WORKSPACE

    branch = ctx.branch_provider(root)
    if not branch:
        ctx.state.clear()
        ctx.refresh_view()
        return NO_BRANCH

    if branch == ctx.state.branch and ctx.state.color:
        obs("state", f"INFO: tick no-op branch={branch!r}")
        return STABLE

    _assign_and_apply(ctx, branch, force_new=False)
    return STABLE


def on_randomize(ctx: BorderContext) -> str:
    """User-requested recolor of the current branch (always picks a new color)."""
    root = ctx.workspace()
    if not root:
        ctx.notify(MSG_NO_WORKSPACE)
        return NO_WORKSPACE

    branch = ctx.branch_provider(root)
    if not branch:
        ctx.notify(MSG_NO_BRANCH)
        return NO_BRANCH

    _assign_and_apply(ctx, branch, force_new=True)
    return STABLE


def on_visible(ctx: BorderContext) -> str:
    return on_randomize(ctx)


TRIGGERS: Dict[str, Callable[[BorderContext], str]] = {
    "tick": on_tick,
    "randomize": on_randomize,
    "visible": on_visible,
}


def dispatch(ctx: BorderContext, trigger: str) -> Optional[str]:
    """Run one trigger. Collaborator failures are logged and never propagate."""
    handler = TRIGGERS.get(trigger)
    if handler is None:
        raise KeyError(f"unknown trigger: {trigger!r}")
    try:
        return handler(ctx)
    except (OSError, SettingsError) as ex:
        eprint(f"[branchborder.state] WARN: {trigger} failed: {ex}")
    except Exception as ex:
        eprint(f"[branchborder.state] WARN: {trigger} failed unexpectedly: {type(ex).__name__}: {ex}")
    return None


def seed_state_from_store(ctx: BorderContext) -> None:
    """Load branch and persisted color into `ctx.state` without assigning or writing.

    Lets a fresh process exclude the color already on screen when randomizing.
    """
    root = ctx.workspace()
    branch = ctx.branch_provider(root) if root else None
    if not branch:
        ctx.state.clear()
        return
    ctx.state.branch = branch
    ctx.state.color = read_branch_map(ctx.store).get(branch)
