"""Tag normalisation, slugs and grouping."""

from __future__ import annotations

import hashlib
import logging
import math
import re
import unicodedata
from collections import defaultdict
from pathlib import Path
from typing import Any, Iterable

from tagpress.errors import FrontMatterError
from tagpress.model.post import Post, TagGroup

_logger = logging.getLogger(__name__)

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]", re.U)
_SLUG_DASH_RE = re.compile(r"[\s_-]+", re.U)


def slugify(value: str) -> str:
    """URL-safe slug: ``"Open Telemetry_SDK"`` → ``"open-telemetry-sdk"``.

    A label with no slug-able characters gets a short stable hash so every
    tag still has a distinct URL.
    """
    norm = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    norm = _SLUG_STRIP_RE.sub("", norm).strip().lower()
    slug = _SLUG_DASH_RE.sub("-", norm).strip("-")
    if slug:
        return slug
    return "tag-" + hashlib.sha1(value.encode("utf-8")).hexdigest()[:8]


def normalize_tags(
    raw: Any,
    *,
    path: Path | str = "<string>",
    warnings: list[str] | None = None,
) -> list[str]:
    """Coerce a front-matter ``tags`` value into a list of non-empty labels.

    Accepts a list, or a whitespace-separated string.  Blank entries are
    dropped with a warning (also appended to *warnings* when given);
    duplicates keep their first position.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        items: list[Any] = raw.split()
    elif isinstance(raw, (list, tuple)):
        items = list(raw)
    else:
        raise FrontMatterError(
            path, f"tags must be a list or a string, got {type(raw).__name__}"
        )

    out: list[str] = []
    seen: set[str] = set()
    for item in items:
        if isinstance(item, (dict, list)):
            raise FrontMatterError(path, f"tag entries must be scalars, got {item!r}")
        label = "" if item is None else str(item).strip()
        if not label:
            msg = f"{Path(path).as_posix()}: dropping empty tag"
            _logger.warning(msg)
            if warnings is not None:
                warnings.append(msg)
            continue
        if label in seen:
            continue
        seen.add(label)
        out.append(label)
    return out


def group_by_tag(posts: Iterable[Post]) -> list[TagGroup]:
    """Group *posts* by tag, sorted by tag name (case-insensitive).

    Post order inside each group follows the input order, so callers pass a
    newest-first collection.  Two labels that slugify identically are merged
    under the first spelling seen.
    """
    names: dict[str, str] = {}
    buckets: dict[str, list[Post]] = defaultdict(list)
    seen: dict[str, set[str]] = defaultdict(set)
    for post in posts:
        for tag in post.tags:
            slug = slugify(tag)
            names.setdefault(slug, tag)
            if post.url not in seen[slug]:
                seen[slug].add(post.url)
                buckets[slug].append(post)
    groups = [TagGroup(name=names[s], slug=s, posts=tuple(ps)) for s, ps in buckets.items()]
    groups.sort(key=lambda g: (g.name.casefold(), g.slug))
    return groups


def tag_cloud(groups: Iterable[TagGroup], *, levels: int = 5) -> list[dict[str, Any]]:
    """Weight each tag 1..*levels* on a log scale of its post count."""
    groups = list(groups)
    if not groups:
        return []
    counts = [g.count for g in groups]
    lo, hi = math.log(min(counts)), math.log(max(counts))
    span = hi - lo
    cloud: list[dict[str, Any]] = []
    for g in groups:
        if span == 0:
            weight = 1
        else:
            weight = 1 + round((math.log(g.count) - lo) / span * (levels - 1))
        cloud.append({"name": g.name, "slug": g.slug, "count": g.count, "weight": weight})
    return cloud
