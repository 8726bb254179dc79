"""Rendering — Jinja2 templates for posts, listings, tags and the feed."""

from tagpress.render.templates import SiteRenderer, format_date

__all__ = ["SiteRenderer", "format_date"]
