"""
tagpress.api
============

Programmatic entrypoints for using tagpress as a library.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (ci_mode=True)
  - JSON-friendly outputs matching the bundled schemas

Usage::

    from tagpress.api import build_site, list_posts, validate_site

    result = build_site("my-blog", ci_mode=True)
    posts = list_posts("my-blog", tag="observability")
    problems = validate_site("my-blog")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from tagpress.contracts.load import iter_errors
from tagpress.core.builder import build_site as _build_site
from tagpress.core.config import CONFIG_FILENAME, SiteConfig
from tagpress.core.discover import DiscoverConfig, iter_content_files
from tagpress.core.frontmatter import read_source, split_front_matter
from tagpress.core.loader import load_post, load_site as _load_site
from tagpress.core.tags import slugify
from tagpress.errors import BuildError, ConfigError, FrontMatterError
from tagpress.model import ContentKind
from tagpress.model.build_result import BuildResult
from tagpress.model.site import Site

_logger = logging.getLogger(__name__)


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def load_site(root: str | Path, *, config: Optional[SiteConfig] = None) -> Site:
    """Load config, posts, pages and tags without writing anything.

    Raises
    ------
    FileNotFoundError
        If *root* does not exist.
    """
    return _load_site(_to_path(root), config)


def build_site(
    root: str | Path,
    *,
    out_dir: str | Path | None = None,
    config: Optional[SiteConfig] = None,
    ci_mode: bool = False,
    clean: bool = True,
) -> BuildResult:
    """Build the site under *root*; see ``tagpress.core.builder.build_site``."""
    return _build_site(
        _to_path(root), out_dir=out_dir, config=config, ci_mode=ci_mode, clean=clean
    )


def list_posts(root: str | Path, *, tag: Optional[str] = None) -> list[dict[str, Any]]:
    """Post records, newest first, optionally only those carrying *tag*.

    *tag* matches either the label or its slug.
    """
    site = load_site(root)
    posts = site.posts
    if tag is not None:
        wanted = slugify(tag)
        posts = [p for p in posts if any(slugify(t) == wanted for t in p.tags)]
    return [p.to_dict() for p in posts]


def list_tags(root: str | Path) -> list[dict[str, Any]]:
    """Tag records sorted by name, each with its count and post URLs."""
    return [g.to_dict() for g in load_site(root).tags]


def validate_site(root: str | Path) -> list[str]:
    """Check config and every content file; return problems found (empty = clean).

    Unlike ``load_site`` this does not stop at the first bad file.
    """
    root_p = _to_path(root).resolve()
    if not root_p.exists():
        raise FileNotFoundError(f"validate_site: root does not exist: {root_p}")

    problems: list[str] = []
    try:
        config = SiteConfig.discover(root_p)
    except ConfigError as e:
        return [f"{CONFIG_FILENAME}: {e}"]

    sources = [(root_p / config.posts_dir, ContentKind.POST)]
    if config.show_drafts:
        sources.append((root_p / config.drafts_dir, ContentKind.DRAFT))
    for directory, kind in sources:
        for path in iter_content_files(DiscoverConfig(root=directory)):
            rel = path.relative_to(root_p).as_posix()
            try:
                meta, _ = split_front_matter(read_source(path), path=path)
                problems.extend(f"{rel}: {msg}" for msg in iter_errors(meta, "front_matter.schema.json"))
                load_post(path, config, root=root_p, kind=kind)
            except FrontMatterError as e:
                problems.append(f"{rel}: {e.message}")
            except ConfigError as e:
                problems.append(f"{rel}: {e}")

    if not problems:
        try:
            _load_site(root_p, config)
        except (BuildError, FrontMatterError) as e:
            problems.append(str(e))

    _logger.info("validated %s: %d problem(s)", root_p, len(problems))
    return problems
