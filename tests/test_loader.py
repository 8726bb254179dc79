"""Tests for tagpress.core.loader — posts, dates, permalinks and site loading."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from tagpress.core.config import SiteConfig
from tagpress.core.loader import (
    expand_permalink,
    load_post,
    load_site,
    parse_date,
    split_filename,
)
from tagpress.errors import BuildError, ConfigError, FrontMatterError
from tagpress.model import ContentKind
from tagpress.model.post import Post

FIXTURE_SITE = Path(__file__).resolve().parent / "fixtures" / "site"


def _write(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _post(**kw) -> Post:
    defaults = dict(
        title="T", slug="hello-world", date=datetime(2024, 3, 5, 7, 8, 9),
        url="", source_path="_posts/x.md",
    )
    defaults.update(kw)
    return Post(**defaults)


# ── field parsing ───────────────────────────────────────────────────


class TestParseDate:
    def test_yaml_date_and_datetime(self) -> None:
        assert parse_date(date(2024, 3, 5)) == datetime(2024, 3, 5)
        assert parse_date(datetime(2024, 3, 5, 10, 0)) == datetime(2024, 3, 5, 10, 0)

    def test_strings(self) -> None:
        assert parse_date("2024-03-05") == datetime(2024, 3, 5)
        assert parse_date("2024-03-05 09:30") == datetime(2024, 3, 5, 9, 30)
        assert parse_date("2024-03-05T09:30:00") == datetime(2024, 3, 5, 9, 30)

    def test_timezone_keeps_wall_clock(self) -> None:
        aware = datetime(2024, 3, 5, 9, 30, tzinfo=timezone(timedelta(hours=2)))
        assert parse_date(aware) == datetime(2024, 3, 5, 9, 30)
        assert parse_date("2024-03-05 09:30:00 +0200") == datetime(2024, 3, 5, 9, 30)

    def test_garbage_raises(self) -> None:
        with pytest.raises(FrontMatterError, match="unrecognised date"):
            parse_date("next tuesday", path="_posts/x.md")
        with pytest.raises(FrontMatterError):
            parse_date(12)


class TestSplitFilename:
    def test_dated_name(self) -> None:
        assert split_filename(Path("2024-03-05-telemetry-enrichment.md")) == (
            datetime(2024, 3, 5),
            "telemetry-enrichment",
        )

    def test_undated_name(self) -> None:
        assert split_filename(Path("sketch.md")) == (None, "sketch")

    def test_impossible_date_raises(self) -> None:
        with pytest.raises(FrontMatterError, match="invalid date in filename"):
            split_filename(Path("2024-02-31-nope.md"))


class TestExpandPermalink:
    def test_default_pattern(self) -> None:
        assert expand_permalink("/:year/:month/:day/:title/", _post()) == "/2024/03/05/hello-world/"

    def test_named_styles(self) -> None:
        post = _post(categories=["Dev Ops"])
        assert expand_permalink("pretty", post) == "/dev-ops/2024/03/05/hello-world/"
        assert expand_permalink("date", _post()) == "/2024/03/05/hello-world.html"
        assert expand_permalink("ordinal", _post()) == "/2024/065/hello-world.html"
        assert expand_permalink("none", _post()) == "/hello-world.html"

    def test_unpadded_and_time_placeholders(self) -> None:
        url = expand_permalink("/:short_year/:i_month/:i_day/:hour:minute:second-:slug", _post())
        assert url == "/24/3/5/070809-hello-world"

    def test_unknown_placeholder_raises(self) -> None:
        with pytest.raises(ConfigError, match=":author"):
            expand_permalink("/:author/:title/", _post())


# ── load_post ───────────────────────────────────────────────────────


class TestLoadPost:
    def test_fixture_post(self) -> None:
        path = FIXTURE_SITE / "_posts" / "2024-03-05-telemetry-enrichment.md"
        post = load_post(path, SiteConfig(), root=FIXTURE_SITE)
        assert post is not None
        assert post.title == "Enriching telemetry with custom attributes"
        assert post.subtitle == "Attach request context to every span"
        assert post.date == datetime(2024, 3, 5, 9, 30)
        assert post.url == "/2024/03/05/telemetry-enrichment/"
        assert post.source_path == "_posts/2024-03-05-telemetry-enrichment.md"
        assert post.tags == ["observability", "telemetry", "OpenTelemetry"]
        assert post.excerpt.startswith("Spans without context are hard to search.")
        assert '<figure class="diagram">' in post.content
        assert "<table>" in post.content

    def test_unpublished_returns_none(self) -> None:
        path = FIXTURE_SITE / "_posts" / "2023-06-20-unfinished.md"
        assert load_post(path, SiteConfig(), root=FIXTURE_SITE) is None

    def test_front_matter_date_wins_over_filename(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "_posts/2020-01-01-x.md", "---\ndate: 2021-06-07\n---\nbody\n")
        post = load_post(path, SiteConfig(), root=tmp_path)
        assert post.date == datetime(2021, 6, 7)
        assert post.url == "/2021/06/07/x/"

    def test_post_without_any_date_raises(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "_posts/undated.md", "---\ntitle: Undated\n---\nbody\n")
        with pytest.raises(FrontMatterError, match="no date"):
            load_post(path, SiteConfig(), root=tmp_path)

    def test_draft_without_date_uses_mtime(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "_drafts/idea.md", "---\ntitle: Idea\n---\nbody\n")
        post = load_post(path, SiteConfig(), root=tmp_path, kind=ContentKind.DRAFT)
        assert post.kind is ContentKind.DRAFT
        assert post.slug == "idea"
        assert abs(post.date - datetime.now(timezone.utc).replace(tzinfo=None)) < timedelta(days=1)

    def test_title_defaults_from_slug(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "_posts/2024-01-01-hello_big-world.md", "body\n")
        post = load_post(path, SiteConfig(), root=tmp_path)
        assert post.title == "Hello Big World"

    def test_explicit_slug_is_slugified(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path, "_posts/2024-01-01-x.md", "---\nslug: My Custom Slug\n---\nbody\n"
        )
        post = load_post(path, SiteConfig(), root=tmp_path)
        assert post.slug == "my-custom-slug"
        assert post.url == "/2024/01/01/my-custom-slug/"

    def test_per_post_permalink(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path, "_posts/2024-01-01-x.md", "---\npermalink: /notes/:title.html\n---\nbody\n"
        )
        assert load_post(path, SiteConfig(), root=tmp_path).url == "/notes/x.html"

    def test_tags_from_string_and_singular_tag(self, tmp_path: Path) -> None:
        a = _write(tmp_path, "_posts/2024-01-01-a.md", "---\ntags: python  web\n---\nbody\n")
        b = _write(tmp_path, "_posts/2024-01-02-b.md", "---\ntag: solo\n---\nbody\n")
        assert load_post(a, SiteConfig(), root=tmp_path).tags == ["python", "web"]
        assert load_post(b, SiteConfig(), root=tmp_path).tags == ["solo"]

    def test_empty_tags_dropped_with_warning(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path, "_posts/2024-01-01-a.md", "---\ntags: [python, '', null, '  ']\n---\nbody\n"
        )
        warnings: list[str] = []
        post = load_post(path, SiteConfig(), root=tmp_path, warnings=warnings)
        assert post.tags == ["python"]
        assert len(warnings) == 3
        assert all("empty tag" in w for w in warnings)

    def test_no_tags_is_empty_list(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "_posts/2024-01-01-a.md", "---\ntags:\n---\nbody\n")
        post = load_post(path, SiteConfig(), root=tmp_path)
        assert post.tags == []
        assert not post.has_tags

    def test_mapping_tags_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "_posts/2024-01-01-a.md", "---\ntags: {a: 1}\n---\nbody\n")
        with pytest.raises(FrontMatterError, match="tags must be"):
            load_post(path, SiteConfig(), root=tmp_path)

    def test_description_wins_over_excerpt(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "_posts/2024-01-01-a.md",
            "---\ndescription: Short summary\nexcerpt: Other\n---\nFirst paragraph.\n",
        )
        assert load_post(path, SiteConfig(), root=tmp_path).excerpt == "Short summary"

    def test_generated_excerpt_uses_separator(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "_posts/2024-01-01-a.md",
            "Intro with *emphasis*.\n<!--more-->\nRest of the post.\n",
        )
        cfg = SiteConfig(excerpt_separator="<!--more-->")
        assert load_post(path, cfg, root=tmp_path).excerpt == "Intro with emphasis."

    def test_unknown_keys_go_to_extra(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path, "_posts/2024-01-01-a.md", "---\nimage: /hero.png\nlayout: wide\n---\nbody\n"
        )
        post = load_post(path, SiteConfig(), root=tmp_path)
        assert post.extra == {"image": "/hero.png"}
        assert post.layout == "wide"

    def test_page_permalink_defaults_to_slug(self) -> None:
        page = load_post(FIXTURE_SITE / "about.md", SiteConfig(), root=FIXTURE_SITE, kind=ContentKind.PAGE)
        assert page.url == "/about/"
        assert page.layout == "page"
        assert "<strong>observability</strong>" in page.content


# ── load_site ───────────────────────────────────────────────────────


class TestLoadSite:
    def test_fixture_site(self) -> None:
        site = load_site(FIXTURE_SITE)
        assert [p.slug for p in site.posts] == [
            "telemetry-enrichment",
            "quiet-week",
            "profiling-python",
        ]
        assert [p.slug for p in site.pages] == ["about"]
        assert site.config.title == "Field Notes"

    def test_tags_merge_by_slug(self) -> None:
        site = load_site(FIXTURE_SITE)
        assert [g.slug for g in site.tags] == [
            "observability",
            "opentelemetry",
            "performance",
            "python",
            "telemetry",
        ]
        obs = site.tag_by_slug("observability")
        assert obs.name == "observability"
        assert [p.slug for p in obs.posts] == ["telemetry-enrichment", "profiling-python"]

    def test_drafts_only_when_enabled(self) -> None:
        assert load_site(FIXTURE_SITE).post_by_slug("sketch") is None
        site = load_site(FIXTURE_SITE, SiteConfig.discover(FIXTURE_SITE).with_env({"TAGPRESS_SHOW_DRAFTS": "1"}))
        sketch = site.post_by_slug("sketch")
        assert sketch is not None and sketch.kind is ContentKind.DRAFT
        assert site.tag_by_slug("ideas") is not None

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="does not exist"):
            load_site(tmp_path / "nope")

    def test_url_collision_raises(self, tmp_path: Path) -> None:
        _write(tmp_path, "_posts/2024-01-01-same.md", "one\n")
        _write(tmp_path, "_posts/2024-01-01-other.md", "---\nslug: same\n---\ntwo\n")
        with pytest.raises(BuildError, match="URL collision"):
            load_site(tmp_path)

    def test_root_files_without_front_matter_are_not_pages(self, tmp_path: Path) -> None:
        _write(tmp_path, "notes.md", "just a file\n")
        _write(tmp_path, "contact.md", "---\ntitle: Contact\n---\nmail me\n")
        site = load_site(tmp_path)
        assert [p.slug for p in site.pages] == ["contact"]

    def test_find_by_url_and_years(self) -> None:
        site = load_site(FIXTURE_SITE)
        assert site.find_by_url("/2024/01/12/quiet-week").slug == "quiet-week"
        assert site.find_by_url("/about/").slug == "about"
        assert site.find_by_url("/missing/") is None
        assert [year for year, _ in site.posts_by_year()] == [2024, 2023]
