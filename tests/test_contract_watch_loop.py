from __future__ import annotations

import tempfile
import threading
import unittest
from pathlib import Path
from typing import Any, Dict, List

from branchborder.state import NO_WORKSPACE, STABLE, BorderContext
from branchborder.watch import run_watch


class CountingSettings:
    def __init__(self) -> None:
        self.doc: Dict[str, Any] = {}
        self.writes = 0

    def read(self) -> Dict[str, Any]:
        return dict(self.doc)

    def get(self, key: str, default: Any = None) -> Any:
        return self.doc.get(key, default)

    def update(self, key: str, value: Any) -> None:
        self.doc[key] = value
        self.writes += 1


class DictStore(dict):
    def update(self, key, value):  # type: ignore[override]
        self[key] = value


class TestWatchLoopContract(unittest.TestCase):
    def _ctx(self, root, branches: List[str], settings: CountingSettings, tmp_css: str) -> BorderContext:
        it = iter(branches)
        return BorderContext(
            store=DictStore(),
            settings=settings,
            workspace=lambda: root,
            css_path=tmp_css,
            branch_provider=lambda r: next(it),
        )

    def test_bounded_loop_applies_only_on_change(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            settings = CountingSettings()
            ctx = self._ctx("/repo", ["main", "main", "dev", "dev"], settings, str(Path(td) / "c.css"))
            phases = run_watch(ctx, interval_s=0, max_ticks=4)
        self.assertEqual(phases, [STABLE] * 4)
        self.assertEqual(settings.writes, 2)
        self.assertEqual(ctx.state.branch, "dev")

    def test_stop_event_ends_loop(self) -> None:
        stop = threading.Event()
        settings = CountingSettings()
        calls: List[int] = []

        def provider(root):  # type: ignore[no-untyped-def]
            calls.append(1)
            stop.set()
            return None

        ctx = BorderContext(store=DictStore(), settings=settings, workspace=lambda: "/repo", branch_provider=provider)
        phases = run_watch(ctx, interval_s=60, stop=stop)
        self.assertEqual(len(calls), 1)
        self.assertEqual(len(phases), 1)
        self.assertEqual(settings.writes, 0)

    def test_loop_survives_failing_cycles(self) -> None:
        def provider(root):  # type: ignore[no-untyped-def]
            raise RuntimeError("git exploded")

        ctx = BorderContext(store=DictStore(), settings=CountingSettings(), workspace=lambda: "/repo", branch_provider=provider)
        phases = run_watch(ctx, interval_s=0, max_ticks=3)
        self.assertEqual(phases, [None, None, None])

    def test_no_workspace_ticks_never_write(self) -> None:
        settings = CountingSettings()
        ctx = BorderContext(store=DictStore(), settings=settings, workspace=lambda: None)
        self.assertEqual(run_watch(ctx, interval_s=0, max_ticks=2), [NO_WORKSPACE, NO_WORKSPACE])
        self.assertEqual(settings.writes, 0)
        self.assertEqual((ctx.state.branch, ctx.state.color), (None, None))


if __name__ == "__main__":
    unittest.main(verbosity=2)
