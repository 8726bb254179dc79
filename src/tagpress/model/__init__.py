"""Enums shared across the loading, rendering and reporting layers."""

from __future__ import annotations

from enum import Enum


class ContentKind(str, Enum):
    """Where a content file came from."""

    POST = "post"
    DRAFT = "draft"
    PAGE = "page"


class ExportFormat(str, Enum):
    """Formats understood by ``reports.exporters``."""

    JSON = "json"
    MARKDOWN = "markdown"
    TEXT = "text"
