"""Loader — turns content files into ``Post`` records and a ``Site``.

A post's date comes from its ``date`` front-matter key, falling back to the
``YYYY-MM-DD-`` filename prefix; a post with neither is rejected.  Its URL
comes from the ``permalink`` pattern (site-wide or per post).
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from tagpress.core.config import SiteConfig
from tagpress.core.discover import DiscoverConfig, discover_pages, iter_content_files
from tagpress.core.frontmatter import has_front_matter, read_source, split_front_matter
from tagpress.core.markup import plain_text, render_body, truncate_words
from tagpress.core.tags import group_by_tag, normalize_tags, slugify
from tagpress.errors import BuildError, ConfigError, FrontMatterError
from tagpress.model import ContentKind
from tagpress.model.post import Post
from tagpress.model.site import Site

_logger = logging.getLogger(__name__)

_FILENAME_RE = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)$")
_PLACEHOLDER_RE = re.compile(r":([a-z_]+)")

_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)

# Jekyll's named permalink styles.
PERMALINK_STYLES = {
    "date": "/:categories/:year/:month/:day/:title.html",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "ordinal": "/:categories/:year/:y_day/:title.html",
    "none": "/:categories/:title.html",
}

# Front-matter keys mapped onto Post fields; everything else goes to ``extra``.
_KNOWN_KEYS = frozenset(
    {
        "title", "subtitle", "date", "description", "excerpt", "tags", "tag",
        "categories", "category", "layout", "slug", "permalink", "published",
    }
)

_EXCERPT_WORDS = 60


# ── field coercion ──────────────────────────────────────────────────


def _naive(dt: datetime) -> datetime:
    # Keep the wall-clock time the author wrote; mixed aware/naive values
    # cannot be sorted together.
    return dt.replace(tzinfo=None) if dt.tzinfo is not None else dt


def parse_date(value: Any, *, path: Path | str = "<string>") -> datetime:
    """Coerce a front-matter date (YAML date, datetime or string) to ``datetime``."""
    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        for fmt in _DATE_FORMATS:
            try:
                return _naive(datetime.strptime(text, fmt))
            except ValueError:
                continue
        try:
            return _naive(datetime.fromisoformat(text))
        except ValueError:
            pass
    raise FrontMatterError(path, f"unrecognised date {value!r}")


def split_filename(path: Path) -> tuple[datetime | None, str]:
    """``2024-03-05-telemetry-enrichment.md`` → ``(datetime(2024, 3, 5), "telemetry-enrichment")``."""
    m = _FILENAME_RE.match(path.stem)
    if not m:
        return None, path.stem
    try:
        when = datetime(int(m["year"]), int(m["month"]), int(m["day"]))
    except ValueError as e:
        raise FrontMatterError(path, f"invalid date in filename: {e}") from e
    return when, m["slug"]


def _string_list(value: Any, *, key: str, path: Path) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    raise FrontMatterError(path, f"{key} must be a list or a string")


def _string(value: Any, *, key: str, path: Path) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise FrontMatterError(path, f"{key} must be a string")
    return str(value).strip()


def expand_permalink(pattern: str, post: Post) -> str:
    """Expand ``:year``/``:title``/… placeholders of a permalink pattern."""
    pattern = PERMALINK_STYLES.get(pattern, pattern)
    d = post.date
    values = {
        "year": f"{d.year:04d}",
        "short_year": f"{d.year % 100:02d}",
        "month": f"{d.month:02d}",
        "i_month": str(d.month),
        "day": f"{d.day:02d}",
        "i_day": str(d.day),
        "y_day": f"{d.timetuple().tm_yday:03d}",
        "hour": f"{d.hour:02d}",
        "minute": f"{d.minute:02d}",
        "second": f"{d.second:02d}",
        "title": post.slug,
        "slug": post.slug,
        "categories": "/".join(slugify(c) for c in post.categories),
    }

    def _sub(m: re.Match[str]) -> str:
        key = m.group(1)
        if key not in values:
            raise ConfigError(f"unknown permalink placeholder ':{key}' in {pattern!r}")
        return values[key]

    url = _PLACEHOLDER_RE.sub(_sub, pattern)
    url = re.sub(r"/{2,}", "/", "/" + url)
    return url


def make_excerpt(body: str, suffix: str, config: SiteConfig) -> str:
    """Plain-text excerpt: the content before ``excerpt_separator``."""
    head = body.strip().split(config.excerpt_separator, 1)[0]
    html = render_body(head, suffix, config.markdown_extensions)
    return truncate_words(plain_text(html), _EXCERPT_WORDS)


# ── loading ─────────────────────────────────────────────────────────


def load_post(
    path: Path,
    config: SiteConfig,
    *,
    root: Path | None = None,
    kind: ContentKind = ContentKind.POST,
    warnings: list[str] | None = None,
) -> Post | None:
    """Load one content file.  Returns ``None`` for ``published: false``."""
    text = read_source(path)
    meta, body = split_front_matter(text, path=path)
    rel = path.relative_to(root).as_posix() if root else path.as_posix()

    if meta.get("published") is False:
        _logger.info("%s: skipped (published: false)", rel)
        return None

    file_date, file_slug = split_filename(path)
    explicit_slug = _string(meta.get("slug"), key="slug", path=path)
    slug = slugify(explicit_slug) if explicit_slug else file_slug

    if meta.get("date") is not None:
        when = parse_date(meta["date"], path=path)
    elif file_date is not None:
        when = file_date
    elif kind is not ContentKind.POST:
        when = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc).replace(tzinfo=None)
    else:
        raise FrontMatterError(
            path, "post has no date: add a 'date' key or a YYYY-MM-DD- filename prefix"
        )

    raw_tags = meta.get("tags")
    if raw_tags is None and meta.get("tag") is not None:
        raw_tags = [meta["tag"]]
    tags = normalize_tags(raw_tags, path=rel, warnings=warnings)

    categories = _string_list(
        meta.get("categories", meta.get("category")), key="categories", path=path
    )

    title = _string(meta.get("title"), key="title", path=path)
    if not title:
        title = slug.replace("-", " ").replace("_", " ").strip().title()

    description = _string(meta.get("description"), key="description", path=path)
    explicit_excerpt = _string(meta.get("excerpt"), key="excerpt", path=path)
    excerpt = description or explicit_excerpt or make_excerpt(body, path.suffix, config)

    post = Post(
        title=title,
        slug=slug,
        date=when,
        url="",
        source_path=rel,
        subtitle=_string(meta.get("subtitle"), key="subtitle", path=path),
        excerpt=excerpt,
        description=description,
        tags=tags,
        categories=categories,
        layout=_string(meta.get("layout"), key="layout", path=path)
        or ("page" if kind is ContentKind.PAGE else "post"),
        kind=kind,
        raw=body,
        content=render_body(body, path.suffix, config.markdown_extensions),
        extra={k: v for k, v in meta.items() if k not in _KNOWN_KEYS},
    )

    permalink = _string(meta.get("permalink"), key="permalink", path=path)
    if kind is ContentKind.PAGE and not permalink:
        permalink = "/:title/"
    post.url = expand_permalink(permalink or config.permalink, post)
    return post


def _check_unique_urls(docs: list[Post]) -> None:
    seen: dict[str, str] = {}
    for doc in docs:
        other = seen.get(doc.url)
        if other is not None:
            raise BuildError(
                f"URL collision: {doc.source_path} and {other} both publish to {doc.url}"
            )
        seen[doc.url] = doc.source_path


def load_site(root: Path, config: SiteConfig | None = None) -> Site:
    """Load the whole site: config, posts (newest first), pages and tags.

    Raises
    ------
    FileNotFoundError
        If *root* does not exist.
    FrontMatterError
        If any content file has unusable front matter or no date.
    BuildError
        If two documents publish to the same URL.
    """
    root = root.resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"load_site: root does not exist: {root}")
    cfg = config if config is not None else SiteConfig.discover(root)
    warnings: list[str] = []

    sources = [(root / cfg.posts_dir, ContentKind.POST)]
    if cfg.show_drafts:
        sources.append((root / cfg.drafts_dir, ContentKind.DRAFT))

    posts: list[Post] = []
    for directory, kind in sources:
        for path in iter_content_files(DiscoverConfig(root=directory)):
            post = load_post(path, cfg, root=root, kind=kind, warnings=warnings)
            if post is not None:
                posts.append(post)
    posts.sort(key=lambda p: (p.date, p.slug), reverse=True)

    pages: list[Post] = []
    for path in discover_pages(root, exclude=set(cfg.exclude)):
        if not has_front_matter(read_source(path)):
            continue  # plain file, copied as a static asset
        page = load_post(path, cfg, root=root, kind=ContentKind.PAGE, warnings=warnings)
        if page is not None:
            pages.append(page)

    _check_unique_urls(posts + pages)
    _logger.info("loaded %d posts and %d pages from %s", len(posts), len(pages), root)
    return Site(
        root=root,
        config=cfg,
        posts=posts,
        pages=pages,
        tags=group_by_tag(posts),
        warnings=warnings,
    )
