"""Post and tag records — the collection every template iterates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from . import ContentKind


@dataclass(slots=True)
class Post:
    """A single rendered content file.

    ``content`` holds the rendered HTML body, ``raw`` the Markdown source
    without its front matter.  Pages share this record with
    ``kind == ContentKind.PAGE``.
    """

    title: str
    slug: str
    date: datetime
    url: str
    source_path: str
    subtitle: str = ""
    excerpt: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    layout: str = "post"
    kind: ContentKind = ContentKind.POST
    raw: str = ""
    content: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def has_tags(self) -> bool:
        return bool(self.tags)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self, *, include_content: bool = False) -> dict[str, Any]:
        d: dict[str, Any] = {
            "title": self.title,
            "slug": self.slug,
            "date": self.date.isoformat(),
            "url": self.url,
            "source_path": self.source_path,
            "excerpt": self.excerpt,
            "tags": list(self.tags),
            "kind": self.kind.value,
        }
        if self.subtitle:
            d["subtitle"] = self.subtitle
        if self.description:
            d["description"] = self.description
        if self.categories:
            d["categories"] = list(self.categories)
        if include_content:
            d["content"] = self.content
        return d


@dataclass(frozen=True, slots=True)
class TagGroup:
    """A tag label with its URL slug and the posts carrying it (newest first)."""

    name: str
    slug: str
    posts: tuple[Post, ...] = ()

    @property
    def count(self) -> int:
        return len(self.posts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "count": self.count,
            "posts": [p.url for p in self.posts],
        }
