"""tagpress — static blog builder for tagged Markdown posts."""

__all__ = [
    "__version__",
    "load_site",
    "build_site",
    "list_posts",
    "list_tags",
    "validate_site",
]
__version__ = "0.1.0"

# Programmatic entrypoints live in tagpress.api.
from tagpress.api import (  # noqa: E402, F401
    build_site,
    list_posts,
    list_tags,
    load_site,
    validate_site,
)
