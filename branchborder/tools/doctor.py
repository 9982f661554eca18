from __future__ import annotations

import argparse
import json
import shutil
import sys
from pathlib import Path
from typing import List, Tuple

from branchborder.git import get_branch
from branchborder.settings import JsonSettings, SettingsError, default_settings_path
from branchborder.store import STATE_KEY, default_state_path
from branchborder.thick_border import COMPANION_EXTENSION_ID, companion_installed, default_extensions_dir


def _check_git(workspace: Path) -> Tuple[List[str], List[str]]:
    warnings: List[str] = []
    errors: List[str] = []

    if not shutil.which("git"):
        errors.append("git binary not found on PATH")
        return warnings, errors

    if not workspace.is_dir():
        errors.append(f"Workspace does not exist: {workspace}")
        return warnings, errors

    branch = get_branch(workspace)
    if not branch:
        errors.append(f"Could not determine a branch in {workspace} (not a repository, or no commits yet)")
    return warnings, errors


def _check_settings(path: Path) -> Tuple[List[str], List[str]]:
    warnings: List[str] = []
    errors: List[str] = []
    if not path.exists():
        warnings.append(f"Settings file {path} does not exist yet (created on first color)")
        return warnings, errors
    try:
        JsonSettings(path).read()
    except SettingsError as e:
        errors.append(f"{e} (comments and trailing commas are not supported; colors will not be written)")
    return warnings, errors


def _check_state(path: Path) -> Tuple[List[str], List[str]]:
    warnings: List[str] = []
    errors: List[str] = []
    if not path.exists():
        return warnings, errors
    try:
        doc = json.loads(path.read_text(encoding="utf-8") or "{}")
    except (OSError, ValueError) as e:
        warnings.append(f"State file {path} is unreadable and will be reset: {e}")
        return warnings, errors
    raw = doc.get(STATE_KEY) if isinstance(doc, dict) else None
    if raw is not None and not isinstance(raw, dict):
        warnings.append(f"State key {STATE_KEY} is not an object and will be reset")
    return warnings, errors


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="branchborder doctor", description="Environment checks for branchborder.")
    ap.add_argument("--workspace", default=".", help="Workspace root (default: current directory).")
    ap.add_argument("--settings-file", default=None, help="Workspace settings JSON (default: <workspace>/.vscode/settings.json).")
    ap.add_argument("--state-file", default=None, help="Branch color state JSON.")
    ap.add_argument("--extensions-dir", default=None, help="Editor extensions directory.")
    ap.add_argument("--strict", action="store_true", help="Treat warnings as errors (exit code 2).")
    args = ap.parse_args(argv)

    workspace = Path(args.workspace).expanduser()
    settings_path = Path(args.settings_file).expanduser() if args.settings_file else default_settings_path(workspace)
    state_path = Path(args.state_file).expanduser() if args.state_file else default_state_path()
    ext_dir = Path(args.extensions_dir).expanduser() if args.extensions_dir else default_extensions_dir()

    print(f"[branchborder-doctor] workspace: {workspace}")
    print(f"[branchborder-doctor] python: {sys.executable}")

    warnings: List[str] = []
    errors: List[str] = []
    for w, e in (_check_git(workspace), _check_settings(settings_path), _check_state(state_path)):
        warnings += w
        errors += e

    if not companion_installed(ext_dir):
        warnings.append(f"{COMPANION_EXTENSION_ID} not found in {ext_dir} (only needed for the thick border)")

    if errors:
        print("\n[branchborder-doctor] ERRORS:")
        for e in errors:
            print(f"  - {e}")
    if warnings:
        print("\n[branchborder-doctor] WARNINGS:")
        for w in warnings:
            print(f"  - {w}")

    if errors:
        print("\n[branchborder-doctor] RESULT: FAIL")
        return 2
    if warnings and args.strict:
        print("\n[branchborder-doctor] RESULT: WARN (strict => FAIL)")
        return 2
    if warnings:
        print("\n[branchborder-doctor] RESULT: WARN")
        return 1
    print("\n[branchborder-doctor] RESULT: OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
