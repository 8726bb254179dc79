"""Reports — listings of the post collection without building the site."""

from tagpress.reports.exporters import export_json, export_markdown, export_posts, export_text

__all__ = ["export_json", "export_markdown", "export_posts", "export_text"]
