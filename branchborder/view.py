# branchborder/view.py
from __future__ import annotations

from typing import List

from .state import BorderState

RANDOMIZE_LABEL = "Randomize Color"


def render_status(state: BorderState) -> List[str]:
    return [
        f"Branch: {state.branch or 'unknown'}",
        f"Color: {state.color or 'unset'}",
        RANDOMIZE_LABEL,
    ]


def print_status(state: BorderState) -> None:
    for line in render_status(state):
        print(line)
