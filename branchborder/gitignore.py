# branchborder/gitignore.py
from __future__ import annotations

from pathlib import Path
from typing import Union

from .git import run_git
from .util.console import eprint, obs

SETTINGS_ENTRY = ".vscode/settings.json"


def ensure_gitignore(root: Union[str, Path], entry: str = SETTINGS_ENTRY) -> bool:
    """Keep the per-workspace settings file out of version control.

    Appends `entry` to <root>/.gitignore unless a line already matches it,
    then untracks the file if git still tracks it. Returns True when the
    .gitignore was changed. I/O failures are logged and reported as False.
    """
    gitignore = Path(root) / ".gitignore"
    try:
        content = gitignore.read_text(encoding="utf-8")
    except FileNotFoundError:
        content = ""
    except (OSError, UnicodeDecodeError) as ex:
        eprint(f"[branchborder.gitignore] WARN: cannot read {gitignore}: {ex}")
        return False

    lines = [ln.strip() for ln in content.split("\n")]
    if entry in lines:
        return False

    if content == "" or content.endswith("\n"):
        new_content = content + entry + "\n"
    else:
        new_content = content + "\n" + entry + "\n"

    try:
        with open(gitignore, "w", encoding="utf-8", newline="") as f:
            f.write(new_content)
    except OSError as ex:
        eprint(f"[branchborder.gitignore] WARN: failed to update {gitignore}: {ex}")
        return False
    obs("gitignore", f"INFO: added {entry} to {gitignore}")

    if run_git(["ls-files", entry], root):
        run_git(["rm", "--cached", entry], root)
        obs("gitignore", f"INFO: untracked {entry}")
    return True
