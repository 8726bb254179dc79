"""Page rendering with Jinja2.

Templates ship with the package under ``data/templates``; a site can override
any of them by placing a file with the same name in its ``templates_dir``.
Every listing page (index, tag, archive) renders posts through the shared
``_post_item.html`` partial, so title, date, excerpt, tags and link markup is
identical everywhere.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateNotFound,
    select_autoescape,
)

from tagpress import __version__
from tagpress.core.paginate import Page, paginate
from tagpress.core.tags import slugify, tag_cloud
from tagpress.model.post import Post, TagGroup
from tagpress.model.site import Site

_logger = logging.getLogger(__name__)

_UNPADDED_RE = re.compile(r"%-([dmHIMS])")


def format_date(value: date | datetime, fmt: str) -> str:
    """``strftime`` with portable support for the ``%-d`` style unpadded codes."""
    def _unpadded(m: re.Match[str]) -> str:
        return str(int(value.strftime("%" + m.group(1))))

    return value.strftime(_UNPADDED_RE.sub(_unpadded, fmt))


def iso8601(value: date | datetime) -> str:
    """RFC 3339 timestamp for feeds; naive values are taken as UTC."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return value.isoformat()


class SiteRenderer:
    """Jinja2-based renderer for every page type of a ``Site``.

    Example:
        renderer = SiteRenderer(site)
        html = renderer.render_post(site.posts[0])
    """

    def __init__(self, site: Site) -> None:
        self.site = site
        self.config = site.config
        self._position = {p.url: i for i, p in enumerate(site.posts)}

        loaders: list[Any] = []
        if self.config.templates_dir:
            override = site.root / self.config.templates_dir
            if override.is_dir():
                loaders.append(FileSystemLoader(str(override)))
            else:
                _logger.warning("templates_dir %s does not exist, using defaults", override)
        loaders.append(PackageLoader("tagpress", "data/templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["date_fmt"] = self._date_fmt
        self.env.filters["iso8601"] = iso8601
        self.env.filters["slugify"] = slugify
        self.env.filters["relative_url"] = self.relative_url
        self.env.filters["absolute_url"] = self.absolute_url
        self.env.filters["tag_url"] = self.tag_url
        self.env.globals.update(
            site=self.config,
            tags=site.tags,
            pages=site.pages,
            generator=f"tagpress {__version__}",
        )

    # ── filters ─────────────────────────────────────────────────────

    def _date_fmt(self, value: date | datetime, fmt: str | None = None) -> str:
        return format_date(value, fmt or self.config.date_format)

    def relative_url(self, url: str) -> str:
        base = self.config.baseurl.rstrip("/")
        if not url.startswith("/"):
            url = "/" + url
        return f"{base}{url}"

    def absolute_url(self, url: str) -> str:
        return self.config.url.rstrip("/") + self.relative_url(url)

    def tag_url(self, tag: str) -> str:
        return f"/tags/{slugify(tag)}/"

    # ── rendering ───────────────────────────────────────────────────

    def _render(self, template_name: str, **context: Any) -> str:
        return self.env.get_template(template_name).render(**context)

    def _layout_for(self, doc: Post) -> str:
        name = f"{doc.layout}.html"
        try:
            self.env.get_template(name)
        except TemplateNotFound:
            fallback = "page.html" if doc.layout != "post" else "post.html"
            _logger.warning(
                "%s: layout %r not found, using %s", doc.source_path, doc.layout, fallback
            )
            return fallback
        return name

    def render_post(self, post: Post) -> str:
        idx = self._position.get(post.url, -1)
        newer = self.site.posts[idx - 1] if idx > 0 else None
        older = (
            self.site.posts[idx + 1]
            if 0 <= idx < len(self.site.posts) - 1
            else None
        )
        return self._render(
            self._layout_for(post),
            page=post,
            post=post,
            newer=newer,
            older=older,
        )

    def render_page(self, page: Post) -> str:
        return self._render(self._layout_for(page), page=page, post=page, newer=None, older=None)

    def index_pages(self) -> list[Page]:
        return paginate(self.site.posts, self.config.paginate)

    def render_index(self, page: Page) -> str:
        return self._render(
            "index.html",
            paginator=page,
            posts=page.posts,
            page_title=self.config.title,
        )

    def render_tag(self, group: TagGroup) -> str:
        return self._render(
            "tag.html",
            tag=group,
            posts=group.posts,
            page_title=f"Posts tagged “{group.name}”",
        )

    def render_tags_index(self) -> str:
        return self._render(
            "tags.html",
            cloud=tag_cloud(self.site.tags),
            page_title="Tags",
        )

    def render_archive(self) -> str:
        return self._render(
            "archive.html",
            years=self.site.posts_by_year(),
            page_title="Archive",
        )

    def render_feed(self, *, limit: int = 20) -> str:
        posts = self.site.posts[:limit]
        updated = posts[0].date if posts else datetime(2000, 1, 1)
        return self._render("feed.xml", posts=posts, updated=updated)
