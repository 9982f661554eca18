from __future__ import annotations

import argparse
import os
import signal
import sys
import threading
from pathlib import Path
from typing import Callable, List, Optional

from .applier import default_css_path, write_thick_border_css
from .colors import hex_to_rgb
from .gitignore import ensure_gitignore
from .palette import env_primary_colors, parse_color_list
from .settings import JsonSettings, default_settings_path, default_user_settings_path
from .state import STABLE, BorderContext, BorderState, dispatch, first_workspace_root, seed_state_from_store
from .store import StateStore
from .thick_border import enable_thick_border
from .view import print_status, render_status
from .watch import DEFAULT_INTERVAL_S, run_watch


def _add_common(ap: argparse.ArgumentParser) -> None:
    ap.add_argument(
        "--workspace",
        default=os.getenv("BRANCHBORDER_WORKSPACE", "."),
        help="Workspace root; with an os.pathsep list only the first is used (default: env BRANCHBORDER_WORKSPACE or '.')",
    )
    ap.add_argument(
        "--state-file",
        default=None,
        help="Branch color state JSON (default: env BRANCHBORDER_STATE_FILE or ~/.branchborder/state.json)",
    )
    ap.add_argument(
        "--settings-file",
        default=None,
        help="Settings JSON receiving colorCustomizations (default: <workspace>/.vscode/settings.json)",
    )
    ap.add_argument(
        "--css-out",
        default=None,
        help="Thick border stylesheet path (default: env BRANCHBORDER_CSS_PATH or ~/.branchborder/custom.css)",
    )
    ap.add_argument(
        "--colors",
        default=None,
        help="Comma separated palette override, e.g. '#AA0000,#00AA00' (default: env BRANCHBORDER_PRIMARY_COLORS or settings)",
    )


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="branchborder",
        description="Color the editor window border by git branch.",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    p_watch = sub.add_parser("watch", help="Keep the border color in sync with the current branch")
    _add_common(p_watch)
    p_watch.add_argument("--interval", type=float, default=DEFAULT_INTERVAL_S, help="Seconds between checks (default: 5)")
    p_watch.add_argument("--max-ticks", type=int, default=None, help="Stop after N checks")
    p_watch.add_argument("--once", action="store_true", help="Check once and exit (same as --max-ticks 1)")
    p_watch.add_argument("--no-gitignore", action="store_true", help="Do not add the settings file to .gitignore")

    for name, text in (
        ("tick", "Run one refresh cycle"),
        ("randomize", "Pick a new color for the current branch"),
        ("status", "Show branch and color without writing anything"),
    ):
        _add_common(sub.add_parser(name, help=text))

    p_thick = sub.add_parser("enable-thick-border", help="Configure the Custom CSS and JS Loader extension")
    _add_common(p_thick)
    p_thick.add_argument(
        "--user-settings-file",
        default=None,
        help="User-level settings JSON (default: env BRANCHBORDER_USER_SETTINGS_FILE or ~/.config/Code/User/settings.json)",
    )
    p_thick.add_argument("--extensions-dir", default=None, help="Extensions directory (default: ~/.vscode/extensions)")

    sub.add_parser("doctor", help="Check the environment (see `branchborder doctor --help`)", add_help=False)
    return ap


def _workspace_root(raw: str) -> Optional[str]:
    return first_workspace_root((raw or "").split(os.pathsep))


def _palette_override(raw: Optional[str]) -> Optional[List[str]]:
    colors = parse_color_list(raw) if raw is not None else env_primary_colors()
    if not colors:
        return None
    bad = [c for c in colors if hex_to_rgb(c) is None]
    if bad:
        raise SystemExit(f"Invalid color(s) in palette override: {', '.join(bad)} (expected #RRGGBB or #RGB)")
    return colors


def build_context(args: argparse.Namespace, on_refresh: Optional[Callable[[BorderState], None]] = None) -> BorderContext:
    root = _workspace_root(args.workspace)
    settings_path = (
        Path(args.settings_file).expanduser()
        if args.settings_file
        else default_settings_path(root or Path(args.workspace).expanduser())
    )
    return BorderContext(
        store=StateStore(args.state_file),
        settings=JsonSettings(settings_path),
        workspace=lambda: root,
        css_path=Path(args.css_out).expanduser() if args.css_out else default_css_path(),
        palette_override=_palette_override(args.colors),
        on_refresh=on_refresh,
    )


def _print_on_change() -> Callable[[BorderState], None]:
    last: List[List[str]] = []

    def _refresh(state: BorderState) -> None:
        lines = render_status(state)
        if last and last[-1] == lines:
            return
        last.append(lines)
        for ln in lines:
            print(ln, flush=True)

    return _refresh


def _cmd_watch(args: argparse.Namespace) -> int:
    max_ticks = 1 if args.once else args.max_ticks
    if max_ticks is not None and max_ticks < 1:
        raise SystemExit("--max-ticks must be >= 1")

    ctx = build_context(args, on_refresh=_print_on_change())
    root = ctx.workspace()
    if root and not args.no_gitignore:
        ensure_gitignore(root)

    stop = threading.Event()

    def _shutdown(signum, frame):  # type: ignore[no-untyped-def]
        stop.set()

    prev_int = signal.signal(signal.SIGINT, _shutdown)
    prev_term = signal.signal(signal.SIGTERM, _shutdown)
    try:
        run_watch(ctx, interval_s=args.interval, stop=stop, max_ticks=max_ticks)
    finally:
        if prev_int is not None:
            signal.signal(signal.SIGINT, prev_int)
        if prev_term is not None:
            signal.signal(signal.SIGTERM, prev_term)
    return 0


def _cmd_tick(args: argparse.Namespace) -> int:
    ctx = build_context(args)
    dispatch(ctx, "tick")
    print_status(ctx.state)
    return 0


def _cmd_randomize(args: argparse.Namespace) -> int:
    ctx = build_context(args)
    seed_state_from_store(ctx)
    phase = dispatch(ctx, "randomize")
    print_status(ctx.state)
    return 0 if phase == STABLE else 1


def _cmd_status(args: argparse.Namespace) -> int:
    ctx = build_context(args)
    seed_state_from_store(ctx)
    print_status(ctx.state)
    return 0


def _cmd_enable_thick_border(args: argparse.Namespace) -> int:
    ctx = build_context(args)
    seed_state_from_store(ctx)
    if ctx.state.color and ctx.css_path is not None and not Path(ctx.css_path).exists():
        write_thick_border_css(ctx.state.color, ctx.css_path)

    user_settings_path = (
        Path(args.user_settings_file).expanduser() if args.user_settings_file else default_user_settings_path()
    )
    ok = enable_thick_border(ctx.css_path, JsonSettings(user_settings_path), args.extensions_dir)
    return 0 if ok else 1


def main(argv: List[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and argv[0] == "doctor":
        from .tools import doctor

        return doctor.main(argv[1:])

    args = _build_parser().parse_args(argv)
    handlers = {
        "watch": _cmd_watch,
        "tick": _cmd_tick,
        "randomize": _cmd_randomize,
        "status": _cmd_status,
        "enable-thick-border": _cmd_enable_thick_border,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
