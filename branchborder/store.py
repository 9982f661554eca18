# branchborder/store.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .util.console import eprint

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore

STATE_KEY = "vscodeBorder.branchColors"

JsonPath = Union[str, Path]
BranchColorMap = Dict[str, str]


def default_state_path() -> Path:
    raw = (os.getenv("BRANCHBORDER_STATE_FILE", "") or "").strip()
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".branchborder" / "state.json"


def dump_json_bytes(doc: Any, *, sort_keys: bool = True) -> bytes:
    """Stable, human-readable JSON encoding (same input -> same bytes)."""
    if orjson is not None:
        opt = orjson.OPT_INDENT_2 | (orjson.OPT_SORT_KEYS if sort_keys else 0)
        return orjson.dumps(doc, option=opt) + b"\n"
    return (json.dumps(doc, indent=2, sort_keys=sort_keys, ensure_ascii=False) + "\n").encode("utf-8")


def write_json_atomic(path: Path, doc: Any, *, sort_keys: bool = True) -> None:
    # Replace the symlink target, not the link itself.
    path = Path(path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_bytes(dump_json_bytes(doc, sort_keys=sort_keys))
        os.replace(tmp, path)
    except Exception:
        try:
            tmp.unlink()
        except OSError:
            pass
        raise


class StateStore:
    """Namespaced key-value store persisted as one JSON object on disk.

    Mirrors an editor's global state: `get` returns None for unknown keys,
    `update` overwrites the whole value stored under a key.
    """

    def __init__(self, path: Optional[JsonPath] = None) -> None:
        self.path = Path(path) if path is not None else default_state_path()

    def _read_all(self) -> Dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as ex:
            eprint(f"[branchborder.store] WARN: cannot read {self.path}: {ex}")
            return {}
        try:
            doc = json.loads(text) if text.strip() else {}
        except ValueError as ex:
            eprint(f"[branchborder.store] WARN: state file {self.path} is not valid JSON ({ex}); starting empty")
            return {}
        return doc if isinstance(doc, dict) else {}

    def get(self, key: str) -> Any:
        return self._read_all().get(key)

    def update(self, key: str, value: Any) -> None:
        doc = self._read_all()
        doc[key] = value
        write_json_atomic(self.path, doc)


def read_branch_entries(store: Any) -> Dict[str, Any]:
    """Return the persisted map as stored (unknown entries included), or {} when not a mapping."""
    raw = store.get(STATE_KEY)
    return dict(raw) if isinstance(raw, dict) else {}


def read_branch_map(store: Any) -> BranchColorMap:
    """Return the persisted branch->color map, or {} when absent or malformed."""
    raw = read_branch_entries(store)
    return {k: v for k, v in raw.items() if isinstance(k, str) and isinstance(v, str)}


def write_branch_map(store: Any, mapping: Dict[str, Any]) -> None:
    store.update(STATE_KEY, dict(mapping))
