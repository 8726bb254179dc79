"""
API Routers
===========
JSON endpoints under /api, HTML pages at the site's own URLs.
"""
from . import health, pages, posts, tags

__all__ = ["health", "pages", "posts", "tags"]
