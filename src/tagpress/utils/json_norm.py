"""Canonical JSON for every artifact tagpress writes or prints.

``manifest.json``, ``posts --format json`` and ``tags --json`` all go
through :func:`stable_json_dumps`, so two runs over the same content print
the same bytes: keys sorted, two-space indent, one trailing newline,
non-ASCII titles kept readable.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Mapping


def _to_builtin(obj: Any) -> Any:
    """Reduce records, enums, paths and dates to JSON builtins."""
    if obj is None or isinstance(obj, (str, int, float, bool)) and not isinstance(obj, Enum):
        return obj
    if isinstance(obj, Enum):
        return _to_builtin(obj.value)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Path):
        return obj.as_posix()
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_builtin(asdict(obj))
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_to_builtin(v) for v in obj]
    return str(obj)


def stable_json_dumps(obj: Any, *, indent: int | None = 2) -> str:
    text = json.dumps(_to_builtin(obj), indent=indent, sort_keys=True, ensure_ascii=False)
    return text + "\n"


def write_stable_json(path: Path, obj: Any) -> Path:
    """Write *obj* to *path* as canonical UTF-8 JSON and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(stable_json_dumps(obj), encoding="utf-8")
    return path
