# branchborder/git.py
from __future__ import annotations

import os
import subprocess
import time
from pathlib import Path
from typing import List, Optional, Union

from .util.console import eprint, obs, obs_enabled

DETACHED_SENTINEL = "HEAD"


def _git_timeout_s() -> Optional[float]:
    raw = (os.getenv("BRANCHBORDER_GIT_TIMEOUT_S", "") or "").strip()
    if not raw:
        return None
    try:
        v = float(raw)
        if v > 0:
            return v
    except Exception:
        pass
    return None


def run_git(args: List[str], cwd: Union[str, Path]) -> str:
    """Run one git query in `cwd`; return trimmed stdout, or "" on any failure."""
    cmd = ["git"] + list(args)
    t0 = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            timeout=_git_timeout_s(),
        )
    except FileNotFoundError:
        if obs_enabled():
            eprint("[branchborder.git] WARN: git binary not found on PATH (or workspace missing)")
        return ""
    except subprocess.TimeoutExpired:
        eprint(f"[branchborder.git] WARN: `{' '.join(cmd)}` timed out")
        return ""
    except OSError as ex:
        eprint(f"[branchborder.git] WARN: `{' '.join(cmd)}` failed: {ex}")
        return ""

    elapsed_ms = int((time.monotonic() - t0) * 1000)
    if proc.returncode != 0:
        obs("git", f"INFO: `{' '.join(cmd)}` exit={proc.returncode} ms={elapsed_ms}")
        return ""
    return (proc.stdout or b"").decode("utf-8", errors="replace").strip()


def get_branch(root: Union[str, Path]) -> Optional[str]:
    """Resolve the current branch name for the repository at `root`.

    Order:
      1. `git branch --show-current`
      2. `git rev-parse --abbrev-ref HEAD` (ignored when it says "HEAD", i.e. detached)
      3. `git rev-parse --short HEAD` (detached HEAD: short hash as pseudo-branch)

    Returns None when none of them yields a name (not a repo, no commits, no git).
    """
    branch = run_git(["branch", "--show-current"], root)
    if branch:
        return branch

    fallback = run_git(["rev-parse", "--abbrev-ref", "HEAD"], root)
    if fallback and fallback != DETACHED_SENTINEL:
        return fallback

    short = run_git(["rev-parse", "--short", "HEAD"], root)
    return short or None
