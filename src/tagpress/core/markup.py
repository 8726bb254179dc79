"""Markdown → HTML conversion and plain-text extraction for excerpts."""

from __future__ import annotations

import html as html_mod
import re
from typing import Iterable

import markdown as md_lib

_TAG_RE = re.compile(r"<[^>]+>")
# Block-level tags separate words; inline tags (em, a, code) do not.
_BLOCK_TAG_RE = re.compile(
    r"</?(?:p|div|br|hr|h[1-6]|ul|ol|li|pre|blockquote|table|tr|td|th|figure|figcaption)\b[^>]*>",
    re.I,
)
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b.*?</\1\s*>", re.S | re.I)
_WS_RE = re.compile(r"\s+")

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown", ".mkd"})


def render_markdown(text: str, extensions: Iterable[str] = ("extra",)) -> str:
    """Convert Markdown to HTML5.

    Raw HTML blocks (``<figure>``, ``<table>`` …) pass through untouched and
    fenced code is supported through the ``extra`` extension.
    """
    exts = list(extensions)
    if "fenced_code" not in exts and "extra" not in exts:
        exts.append("fenced_code")
    return md_lib.markdown(text, extensions=exts, output_format="html")


def render_body(text: str, suffix: str, extensions: Iterable[str]) -> str:
    """Render a content body by file type; ``.html`` bodies are used verbatim."""
    if suffix.lower() in MARKDOWN_SUFFIXES:
        return render_markdown(text, extensions)
    return text


def plain_text(html: str) -> str:
    """Strip markup, unescape entities and collapse whitespace."""
    stripped = _SCRIPT_STYLE_RE.sub(" ", html)
    stripped = _BLOCK_TAG_RE.sub(" ", stripped)
    stripped = _TAG_RE.sub("", stripped)
    return _WS_RE.sub(" ", html_mod.unescape(stripped)).strip()


def truncate_words(text: str, limit: int = 50) -> str:
    words = text.split()
    if len(words) <= limit:
        return text
    return " ".join(words[:limit]) + "…"
