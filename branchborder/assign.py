# branchborder/assign.py
from __future__ import annotations

import random
from typing import Any, Optional, Sequence

from .palette import DEFAULT_COLORS, resolve_palette
from .store import read_branch_entries, write_branch_map
from .util.console import obs


def pick_color(
    palette: Sequence[str],
    *,
    force_new: bool = False,
    current_color: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Draw a color uniformly from `palette`.

    On a forced draw the current color is left out of the pool, unless it is
    the only candidate.
    """
    colors = list(palette)
    pool = colors
    if force_new and current_color and len(colors) > 1:
        filtered = [c for c in colors if c != current_color]
        if filtered:
            pool = filtered
    if not pool:
        return DEFAULT_COLORS[0]
    return (rng or random).choice(pool)


def color_for_branch(
    store: Any,
    branch: str,
    force_new: bool = False,
    current_color: Optional[str] = None,
    *,
    palette: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Return the persisted color for `branch`, assigning one if needed.

    A branch keeps its color across calls until `force_new` is requested.
    New colors are persisted before returning.
    """
    entries = read_branch_entries(store)
    color = entries.get(branch)
    if isinstance(color, str) and color and not force_new:
        return color

    colors = resolve_palette(list(palette) if palette is not None else None)
    color = pick_color(colors, force_new=force_new, current_color=current_color, rng=rng)
    # Entries this code cannot read are kept as stored.
    entries[branch] = color
    write_branch_map(store, entries)
    obs("assign", f"INFO: branch={branch!r} color={color} forced={bool(force_new)}")
    return color
