"""YAML front matter — the ``---`` delimited header of a content file."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from tagpress.errors import FrontMatterError

# Opening fence must be the very first line; closing fence is the next
# line consisting only of ``---`` (or ``...``, YAML's document end).
_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)(?:\r?\n)?^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.S | re.M,
)


def read_source(path: Path) -> str:
    """Read a content file as UTF-8 text."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FrontMatterError(path, f"not valid UTF-8: {e}") from e


def has_front_matter(text: str) -> bool:
    return _FRONT_MATTER_RE.match(text.lstrip("\ufeff")) is not None


def split_front_matter(text: str, *, path: Path | str = "<string>") -> tuple[dict[str, Any], str]:
    """Split *text* into ``(front_matter, body)``.

    A document without front matter yields ``({}, text)``.  An empty block
    (``---\\n---``) yields an empty mapping.  Raises ``FrontMatterError`` if the
    block is not valid YAML or is not a mapping.
    """
    text = text.lstrip("\ufeff")
    m = _FRONT_MATTER_RE.match(text)
    if not m:
        return {}, text

    try:
        data = yaml.safe_load(m.group("yaml")) if m.group("yaml").strip() else {}
    except yaml.YAMLError as e:
        raise FrontMatterError(path, f"invalid YAML front matter: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            path, f"front matter must be a mapping, got {type(data).__name__}"
        )
    return data, text[m.end():]


def render_front_matter(data: dict[str, Any]) -> str:
    """Serialise *data* as a front matter block (used when scaffolding posts)."""
    body = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"---\n{body}---\n"
