"""Multi-format exporters for the loaded post collection.

Supports:

*  **JSON** — machine-readable, one record per post plus the tag index.
*  **Markdown** — a table of posts, suitable for a README or PR comment.
*  **Text** — a terminal-friendly listing for ``tagpress posts``.

All exporters accept a :class:`Site` and produce a string; nothing is built.
"""

from __future__ import annotations

from typing import Sequence

from tagpress.core.tags import slugify
from tagpress.model import ExportFormat
from tagpress.model.post import Post
from tagpress.model.site import Site
from tagpress.render.templates import format_date
from tagpress.utils.json_norm import stable_json_dumps


# ════════════════════════════════════════════════════════════════════
# JSON exporter
# ════════════════════════════════════════════════════════════════════


def export_json(site: Site, posts: Sequence[Post] | None = None, *, indent: int = 2) -> str:
    """Export posts and tags as indented JSON."""
    selected = site.posts if posts is None else posts
    return stable_json_dumps(
        {
            "site": {"title": site.config.title, "url": site.config.url},
            "posts": [p.to_dict() for p in selected],
            "tags": [g.to_dict() for g in site.tags],
        },
        indent=indent,
    )


# ════════════════════════════════════════════════════════════════════
# Markdown exporter
# ════════════════════════════════════════════════════════════════════


def _md_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def export_markdown(site: Site, posts: Sequence[Post] | None = None) -> str:
    """Export the collection as a Markdown table (date, title link, tags)."""
    selected = site.posts if posts is None else posts
    lines: list[str] = [f"# {site.config.title}", ""]
    lines.append(f"**Posts:** {len(selected)}  ")
    lines.append(f"**Tags:** {len(site.tags)}")
    lines.append("")
    if selected:
        lines.append("| Date | Title | Tags |")
        lines.append("|------|-------|------|")
        for p in selected:
            tags = ", ".join(f"`{t}`" for t in p.tags)
            lines.append(
                f"| {p.date:%Y-%m-%d} | [{_md_cell(p.title)}]({p.url}) | {tags} |"
            )
        lines.append("")
    return "\n".join(lines)


# ════════════════════════════════════════════════════════════════════
# Text exporter
# ════════════════════════════════════════════════════════════════════


def export_text(site: Site, posts: Sequence[Post] | None = None, *, width: int = 72) -> str:
    """Terminal listing: one block per post, tags on their own line."""
    selected = site.posts if posts is None else posts
    lines: list[str] = ["═" * width, f"  {site.config.title.upper()}", "═" * width]
    for p in selected:
        lines.append(f"  {format_date(p.date, site.config.date_format):>14s}  {p.title}")
        lines.append(f"  {'':14s}  {p.url}")
        if p.tags:
            lines.append(f"  {'':14s}  tags: {', '.join(p.tags)}")
    if not selected:
        lines.append("  (no posts)")
    lines.append("─" * width)
    lines.append(f"  {len(selected)} post(s), {len(site.tags)} tag(s)")
    return "\n".join(lines)


def export_posts(
    site: Site,
    fmt: ExportFormat | str = ExportFormat.TEXT,
    *,
    tag: str | None = None,
) -> str:
    """Dispatch to the exporter for *fmt*, optionally filtered to one tag."""
    fmt = ExportFormat(fmt)
    posts: Sequence[Post] = site.posts
    if tag is not None:
        group = site.tag_by_slug(slugify(tag))
        posts = group.posts if group is not None else ()
    if fmt is ExportFormat.JSON:
        return export_json(site, posts)
    if fmt is ExportFormat.MARKDOWN:
        return export_markdown(site, posts)
    return export_text(site, posts)
