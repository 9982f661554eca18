# branchborder/watch.py
from __future__ import annotations

import threading
from typing import List, Optional

from .state import BorderContext, dispatch

DEFAULT_INTERVAL_S = 5.0


def run_watch(
    ctx: BorderContext,
    *,
    interval_s: float = DEFAULT_INTERVAL_S,
    stop: Optional[threading.Event] = None,
    max_ticks: Optional[int] = None,
) -> List[Optional[str]]:
    """Tick immediately, then every `interval_s` until `stop` is set.

    One cycle at a time: the wait for the next tick starts only after the
    previous cycle finished. `max_ticks` bounds the loop (counts the first tick).
    Returns the phase reported by each tick.
    """
    stop = stop or threading.Event()
    phases: List[Optional[str]] = []
    while not stop.is_set():
        phases.append(dispatch(ctx, "tick"))
        if max_ticks is not None and len(phases) >= max_ticks:
            break
        if stop.wait(max(0.0, float(interval_s))):
            break
    return phases
