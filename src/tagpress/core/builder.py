"""Builder — orchestrates load → render → write and assembles a BuildResult."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePosixPath

from tagpress.contracts.load import validate_instance
from tagpress.core.config import SiteConfig
from tagpress.core.discover import iter_static_files
from tagpress.core.loader import load_site
from tagpress.errors import BuildError
from tagpress.model.build_result import BuildResult
from tagpress.render.templates import SiteRenderer
from tagpress.utils.determinism import deterministic_build_id, deterministic_timestamp
from tagpress.utils.json_norm import write_stable_json

_logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"


def url_to_relpath(url: str) -> str:
    """Map a site URL to the file that serves it.

    ``/2024/03/05/post/`` → ``2024/03/05/post/index.html``;
    ``/feed.xml`` → ``feed.xml``; ``/about`` → ``about/index.html``.
    """
    path = PurePosixPath(url.lstrip("/"))
    if url.endswith("/") or not path.parts:
        path = path / "index.html"
    elif not path.suffix:
        path = path / "index.html"
    return path.as_posix()


def _safe_target(out_dir: Path, rel: str) -> Path:
    """Resolve *rel* under *out_dir*, refusing anything that escapes it."""
    if any(part == ".." for part in PurePosixPath(rel).parts):
        raise BuildError(f"refusing to write outside the output directory: {rel}")
    target = (out_dir / rel).resolve()
    if not target.is_relative_to(out_dir.resolve()):
        raise BuildError(f"refusing to write outside the output directory: {rel}")
    return target


def _source_dirs(root: Path, config: SiteConfig) -> list[Path]:
    dirs = [root / config.posts_dir, root / config.drafts_dir]
    if config.templates_dir:
        dirs.append(root / config.templates_dir)
    return [d.resolve() for d in dirs]


def _resolve_out_dir(root: Path, config: SiteConfig, out_dir: Path | str | None) -> Path:
    """Resolve the output directory, refusing any that overlaps the sources.

    Inside the site root only a hidden or underscore-prefixed directory that
    is not a content directory is accepted.
    """
    out = root / config.output_dir if out_dir is None else Path(out_dir)
    out = out.resolve()
    if out == root or out in root.parents:
        raise BuildError(f"output directory {out} would overwrite the site source")
    for src in _source_dirs(root, config):
        if out == src or out in src.parents or src in out.parents:
            raise BuildError(f"output directory {out} would overwrite the site source {src}")
    if out.is_relative_to(root):
        first = out.relative_to(root).parts[0]
        if not first.startswith((".", "_")):
            raise BuildError(
                f"output directory {out} would overwrite the site source: "
                "use a path outside the site or a \"_\"-prefixed directory"
            )
    return out


def build_site(
    root: Path | str,
    *,
    out_dir: Path | str | None = None,
    config: SiteConfig | None = None,
    ci_mode: bool = False,
    clean: bool = True,
) -> BuildResult:
    """Render the whole site under *root* into *out_dir*.

    This is the **only** entry point that wires loading → rendering → files.
    With ``ci_mode`` the output tree, ``manifest.json`` included, is
    byte-identical across runs.
    """
    site = load_site(Path(root), config)
    cfg = site.config
    out = _resolve_out_dir(site.root, cfg, out_dir)
    warnings = list(site.warnings)
    renderer = SiteRenderer(site)

    outputs: dict[str, bytes] = {}
    generated: set[str] = set()

    def emit(url: str, text: str) -> None:
        rel = url_to_relpath(url)
        if rel in generated:
            raise BuildError(f"two pages render to {rel}")
        if rel in outputs:
            msg = f"{rel}: generated page replaces a static file"
            _logger.warning(msg)
            warnings.append(msg)
        generated.add(rel)
        outputs[rel] = text.encode("utf-8")

    # ── 1. static assets ────────────────────────────────────────────
    skip = {site.root / p.source_path for p in site.pages} | {out}
    skip |= {site.root / cfg.posts_dir, site.root / cfg.drafts_dir}
    if cfg.templates_dir:
        skip.add(site.root / cfg.templates_dir)
    for path in iter_static_files(site.root, exclude=set(cfg.exclude), skip=skip):
        outputs[path.relative_to(site.root).as_posix()] = path.read_bytes()

    # ── 2. documents ────────────────────────────────────────────────
    for post in site.posts:
        emit(post.url, renderer.render_post(post))
    for page in site.pages:
        emit(page.url, renderer.render_page(page))

    # ── 3. listings ─────────────────────────────────────────────────
    for index_page in renderer.index_pages():
        emit(index_page.url, renderer.render_index(index_page))
    emit("/tags/", renderer.render_tags_index())
    for group in site.tags:
        emit(f"/tags/{group.slug}/", renderer.render_tag(group))
    emit("/archive/", renderer.render_archive())
    if cfg.feed:
        emit("/feed.xml", renderer.render_feed())

    if MANIFEST_NAME in outputs:
        raise BuildError(f"{MANIFEST_NAME} is reserved for the build manifest")

    # ── 4. write ────────────────────────────────────────────────────
    targets = {rel: _safe_target(out, rel) for rel in outputs}
    if clean and out.exists():
        shutil.rmtree(out)
    for rel in sorted(outputs):
        target = targets[rel]
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(outputs[rel])

    # ── 5. manifest ─────────────────────────────────────────────────
    result = BuildResult(
        build_id=deterministic_build_id(outputs.items(), ci_mode=ci_mode),
        created_at=deterministic_timestamp(ci_mode),
        config=cfg.to_dict(),
        posts=list(site.posts),
        pages=list(site.pages),
        tags=list(site.tags),
        pages_written=sorted(outputs),
        warnings=warnings,
    )
    manifest = result.to_dict()
    validate_instance(manifest, "build_manifest.schema.json")
    write_stable_json(out / MANIFEST_NAME, manifest)

    _logger.info("wrote %d files to %s", len(outputs), out)
    return result
