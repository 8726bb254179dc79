"""Tests for tagpress.core.paginate."""

from __future__ import annotations

from datetime import datetime

from tagpress.core.paginate import page_url, paginate
from tagpress.model.post import Post


def _posts(n: int) -> list[Post]:
    return [
        Post(title=f"P{i}", slug=f"p{i}", date=datetime(2024, 1, i + 1), url=f"/p{i}/", source_path=f"p{i}.md")
        for i in range(n)
    ]


def test_page_urls() -> None:
    assert page_url(1) == "/"
    assert page_url(2) == "/page/2/"


def test_empty_collection_still_has_one_page() -> None:
    (page,) = paginate([], 10)
    assert page.posts == ()
    assert page.url == "/"
    assert page.prev_url is None and page.next_url is None


def test_zero_per_page_means_single_page() -> None:
    pages = paginate(_posts(25), 0)
    assert len(pages) == 1
    assert len(pages[0].posts) == 25


def test_chunks_and_links() -> None:
    posts = _posts(5)
    pages = paginate(posts, 2)
    assert [len(p.posts) for p in pages] == [2, 2, 1]
    assert [p.total_pages for p in pages] == [3, 3, 3]
    assert pages[0].next_url == "/page/2/"
    assert pages[1].prev_url == "/"
    assert pages[2].next_url is None
    assert [p for page in pages for p in page.posts] == posts


def test_exact_fit_is_one_page() -> None:
    assert len(paginate(_posts(3), 3)) == 1
