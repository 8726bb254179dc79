"""BuildResult — the schema-aligned record of one site build."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tagpress import __version__
from tagpress.model.post import Post, TagGroup


@dataclass(slots=True)
class BuildResult:
    """Assembled by ``core.builder`` after every file is written.

    ``to_dict()`` matches ``build_manifest.schema.json`` and is what lands in
    ``<out>/manifest.json``.
    """

    # ── build metadata ──────────────────────────────────────────────
    build_id: str = ""
    created_at: str = ""
    tool_version: str = __version__
    config: dict = field(default_factory=dict)

    # ── content ─────────────────────────────────────────────────────
    posts: list[Post] = field(default_factory=list)
    pages: list[Post] = field(default_factory=list)
    tags: list[TagGroup] = field(default_factory=list)

    # ── output ──────────────────────────────────────────────────────
    pages_written: list[str] = field(default_factory=list)   # sorted, POSIX
    warnings: list[str] = field(default_factory=list)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": "build_manifest_v1",
            "build": {
                "build_id": self.build_id,
                "created_at": self.created_at,
                "tool_version": self.tool_version,
                "config": self.config,
            },
            "summary": {
                "posts_total": len(self.posts),
                "pages_total": len(self.pages),
                "tags_total": len(self.tags),
                "files_written": len(self.pages_written),
            },
            "posts": [p.to_dict() for p in self.posts],
            "tags": [g.to_dict() for g in self.tags],
            "pages_written": list(self.pages_written),
            "warnings": list(self.warnings),
        }
