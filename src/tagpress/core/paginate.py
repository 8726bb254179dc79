"""Split the post collection into index pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from tagpress.model.post import Post


@dataclass(frozen=True, slots=True)
class Page:
    """One page of the post listing.  Page 1 lives at ``/``."""

    number: int
    total_pages: int
    posts: tuple[Post, ...]

    @property
    def url(self) -> str:
        return page_url(self.number)

    @property
    def prev_url(self) -> str | None:
        return page_url(self.number - 1) if self.number > 1 else None

    @property
    def next_url(self) -> str | None:
        return page_url(self.number + 1) if self.number < self.total_pages else None


def page_url(number: int) -> str:
    if number <= 1:
        return "/"
    return f"/page/{number}/"


def paginate(posts: Sequence[Post], per_page: int) -> list[Page]:
    """Chunk *posts* into pages of *per_page*.

    ``per_page <= 0`` puts everything on one page; an empty collection still
    yields a single empty page so the index is always written.
    """
    if per_page <= 0 or len(posts) <= per_page:
        return [Page(number=1, total_pages=1, posts=tuple(posts))]
    chunks = [tuple(posts[i:i + per_page]) for i in range(0, len(posts), per_page)]
    total = len(chunks)
    return [Page(number=n, total_pages=total, posts=c) for n, c in enumerate(chunks, 1)]
