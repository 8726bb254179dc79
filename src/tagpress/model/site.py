"""Site — the loaded collection handed to renderers and exporters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from tagpress.core.config import SiteConfig
from tagpress.model.post import Post, TagGroup


@dataclass(slots=True)
class Site:
    root: Path
    config: SiteConfig
    posts: list[Post] = field(default_factory=list)      # newest first
    pages: list[Post] = field(default_factory=list)
    tags: list[TagGroup] = field(default_factory=list)   # sorted by name
    warnings: list[str] = field(default_factory=list)

    def post_by_slug(self, slug: str) -> Post | None:
        return next((p for p in self.posts if p.slug == slug), None)

    def tag_by_slug(self, slug: str) -> TagGroup | None:
        return next((g for g in self.tags if g.slug == slug), None)

    def find_by_url(self, url: str) -> Post | None:
        """Resolve a request path to a post or page (trailing slash optional)."""
        wanted = {url, url.rstrip("/") + "/", url.rstrip("/")}
        for doc in [*self.posts, *self.pages]:
            if doc.url in wanted:
                return doc
        return None

    def posts_by_year(self) -> list[tuple[int, list[Post]]]:
        years: dict[int, list[Post]] = {}
        for p in self.posts:
            years.setdefault(p.year, []).append(p)
        return sorted(years.items(), key=lambda kv: kv[0], reverse=True)
