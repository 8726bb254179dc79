"""File discovery — find content files respecting exclusion patterns."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

# Directories never treated as content or static assets.
_DEFAULT_EXCLUDES = frozenset(
    {
        ".git",
        ".github",
        ".venv",
        "venv",
        "__pycache__",
        "node_modules",
        ".sass-cache",
        ".jekyll-cache",
        ".pytest_cache",
    }
)

_DEFAULT_IGNORE_FILES = frozenset({".DS_Store", "Thumbs.db"})

CONTENT_EXTS: tuple[str, ...] = (".md", ".markdown", ".mkd", ".html")


@dataclass(frozen=True)
class DiscoverConfig:
    """Configuration for file discovery.  All parameters have defaults."""

    root: Path = field(default_factory=lambda: Path("."))
    include_exts: tuple[str, ...] = CONTENT_EXTS
    ignore_dirs: frozenset[str] = _DEFAULT_EXCLUDES
    ignore_files: frozenset[str] = _DEFAULT_IGNORE_FILES
    follow_symlinks: bool = False


def _is_hidden(name: str) -> bool:
    # Jekyll convention: a leading "_" or "." marks a file as not for output.
    return name.startswith((".", "_", "#")) or name.endswith("~")


def iter_content_files(cfg: DiscoverConfig) -> Iterator[Path]:
    """Yield content files under *cfg.root*, recursively, in sorted order."""
    root = cfg.root
    if not root.is_dir():
        return
    for p in sorted(root.rglob("*")):
        if p.is_symlink() and not cfg.follow_symlinks:
            continue
        if not p.is_file():
            continue
        if p.name in cfg.ignore_files or _is_hidden(p.name):
            continue
        if p.suffix.lower() not in cfg.include_exts:
            continue
        if any(part in cfg.ignore_dirs for part in p.relative_to(root).parts):
            continue
        yield p


def discover_pages(root: Path, *, exclude: frozenset[str] | set[str] = frozenset()) -> list[Path]:
    """Root-level standalone pages (``about.md`` …), excluding index and README."""
    pages: list[Path] = []
    for p in sorted(root.iterdir()):
        if not p.is_file() or _is_hidden(p.name) or p.name in exclude:
            continue
        if p.suffix.lower() not in CONTENT_EXTS:
            continue
        if p.stem.lower() in ("index", "readme", "changelog", "license"):
            continue
        pages.append(p)
    return pages


def iter_static_files(
    root: Path,
    *,
    exclude: frozenset[str] | set[str] = frozenset(),
    skip: frozenset[Path] | set[Path] = frozenset(),
) -> Iterator[Path]:
    """Yield files to copy verbatim into the output tree.

    Anything not hidden, not under an underscore directory and not a content
    source (``skip``) is a static asset.
    """
    skip_resolved = {s.resolve() for s in skip}
    for p in sorted(root.rglob("*")):
        if not p.is_file() or p.is_symlink():
            continue
        rel_parts = p.relative_to(root).parts
        if any(_is_hidden(part) or part in _DEFAULT_EXCLUDES for part in rel_parts):
            continue
        if rel_parts[0] in exclude or p.name in _DEFAULT_IGNORE_FILES:
            continue
        if len(rel_parts) == 1 and p.suffix.lower() in (".md", ".markdown", ".mkd", ".yml", ".yaml"):
            continue
        if any(p.resolve() == s or s in p.resolve().parents for s in skip_resolved):
            continue
        yield p
