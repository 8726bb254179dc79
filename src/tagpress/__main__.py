"""CLI entry-point for tagpress.

Usage:
    python -m tagpress build [ROOT] [--out DIR] [--ci] [--drafts] [--no-clean]
    python -m tagpress posts [ROOT] [--tag TAG] [--format text|json|markdown]
    python -m tagpress tags [ROOT] [--json]
    python -m tagpress validate [ROOT]
    python -m tagpress new ROOT TITLE [--tags TAG ...] [--date YYYY-MM-DD] [--draft]
    python -m tagpress serve [ROOT] [--host HOST] [--port PORT]
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from datetime import date
from pathlib import Path

from tagpress import __version__
from tagpress.api import build_site, load_site, validate_site
from tagpress.core.config import SiteConfig
from tagpress.core.frontmatter import render_front_matter
from tagpress.core.tags import slugify
from tagpress.errors import TagpressError
from tagpress.model import ExportFormat
from tagpress.reports.exporters import export_posts
from tagpress.utils.determinism import env_requires_ci_mode
from tagpress.utils.exit_codes import ExitCode
from tagpress.utils.json_norm import stable_json_dumps


# ── parser ──────────────────────────────────────────────────────────


def _add_root(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Site directory (containing _config.yml and _posts/). Default: .",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tagpress",
        description="Build a static blog from Markdown posts with YAML front matter.",
    )
    p.add_argument("--version", action="version", version=f"tagpress {__version__}")
    p.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="More logging (-v info, -vv debug).",
    )
    sub = p.add_subparsers(dest="command")

    build_p = sub.add_parser("build", help="Render the site into the output directory.")
    _add_root(build_p)
    build_p.add_argument("--out", type=Path, default=None, help="Output directory (default: <root>/_site).")
    build_p.add_argument(
        "--ci", "--deterministic", dest="ci_mode", action="store_true", default=False,
        help="Byte-deterministic output (fixed timestamp, content-derived build id).",
    )
    build_p.add_argument("--drafts", action="store_true", help="Include posts from _drafts/.")
    build_p.add_argument(
        "--no-clean", dest="clean", action="store_false", default=True,
        help="Do not delete the output directory before writing.",
    )
    build_p.add_argument("--json", dest="json_out", action="store_true", help="Print the manifest to stdout.")

    posts_p = sub.add_parser("posts", help="List posts, newest first.")
    _add_root(posts_p)
    posts_p.add_argument("--tag", default=None, help="Only posts carrying this tag (label or slug).")
    posts_p.add_argument(
        "--format",
        choices=[f.value for f in ExportFormat],
        default=ExportFormat.TEXT.value,
    )
    posts_p.add_argument("--drafts", action="store_true", help="Include posts from _drafts/.")

    tags_p = sub.add_parser("tags", help="List tags with post counts.")
    _add_root(tags_p)
    tags_p.add_argument("--json", dest="json_out", action="store_true")

    val_p = sub.add_parser("validate", help="Check config and front matter; exit 1 on problems.")
    _add_root(val_p)

    new_p = sub.add_parser("new", help="Scaffold a new post with front matter.")
    new_p.add_argument("root", type=Path)
    new_p.add_argument("title")
    new_p.add_argument("--tags", nargs="*", default=[])
    new_p.add_argument("--date", dest="post_date", default=None, help="YYYY-MM-DD (default: today).")
    new_p.add_argument("--draft", action="store_true", help="Write into _drafts/ instead of _posts/.")

    serve_p = sub.add_parser("serve", help="Preview the site over HTTP (requires tagpress[api]).")
    _add_root(serve_p)
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=4000)

    p.set_defaults(command=None)
    return p


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _site_config(root: Path, *, drafts: bool = False) -> SiteConfig:
    config = SiteConfig.discover(root)
    if drafts:
        config = dataclasses.replace(config, show_drafts=True)
    return config


# ── handlers ────────────────────────────────────────────────────────


def _handle_build(args: argparse.Namespace) -> int:
    ci_mode = bool(args.ci_mode) or env_requires_ci_mode()
    root = args.root.resolve()
    result = build_site(
        root,
        out_dir=args.out,
        config=_site_config(root, drafts=args.drafts),
        ci_mode=ci_mode,
        clean=args.clean,
    )
    if args.json_out:
        sys.stdout.write(stable_json_dumps(result.to_dict()))
    for w in result.warnings:
        print(f"warning: {w}", file=sys.stderr)
    print(
        f"built {len(result.posts)} post(s), {len(result.tags)} tag(s), "
        f"{len(result.pages_written)} file(s) [{result.build_id}]",
        file=sys.stderr,
    )
    return ExitCode.SUCCESS


def _handle_posts(args: argparse.Namespace) -> int:
    root = args.root.resolve()
    site = load_site(root, config=_site_config(root, drafts=args.drafts))
    out = export_posts(site, args.format, tag=args.tag)
    sys.stdout.write(out if out.endswith("\n") else out + "\n")
    return ExitCode.SUCCESS


def _handle_tags(args: argparse.Namespace) -> int:
    site = load_site(args.root)
    if args.json_out:
        sys.stdout.write(stable_json_dumps([g.to_dict() for g in site.tags]))
        return ExitCode.SUCCESS
    if not site.tags:
        print("(no tags)")
    for g in site.tags:
        print(f"{g.count:4d}  {g.name}  /tags/{g.slug}/")
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    problems = validate_site(args.root)
    for msg in problems:
        print(f"FAIL: {msg}", file=sys.stderr)
    if not problems:
        print("OK")
    return ExitCode.for_problems(problems)


def _handle_new(args: argparse.Namespace) -> int:
    root = args.root.resolve()
    if not root.is_dir():
        print(f"error: site root does not exist: {root}", file=sys.stderr)
        return ExitCode.ERROR
    config = SiteConfig.discover(root)
    try:
        when = date.fromisoformat(args.post_date) if args.post_date else date.today()
    except ValueError:
        print(f"error: --date must be YYYY-MM-DD, got {args.post_date!r}", file=sys.stderr)
        return ExitCode.ERROR

    slug = slugify(args.title)
    directory = root / (config.drafts_dir if args.draft else config.posts_dir)
    target = directory / (f"{slug}.md" if args.draft else f"{when.isoformat()}-{slug}.md")
    if target.exists():
        print(f"error: {target} already exists", file=sys.stderr)
        return ExitCode.ERROR

    meta: dict = {"title": args.title, "date": when.isoformat()}
    tags = [t for t in args.tags if t.strip()]
    if tags:
        meta["tags"] = tags
    directory.mkdir(parents=True, exist_ok=True)
    target.write_text(render_front_matter(meta) + "\n", encoding="utf-8")
    print(target.relative_to(root).as_posix())
    return ExitCode.SUCCESS


def _handle_serve(args: argparse.Namespace) -> int:
    try:
        import uvicorn

        from tagpress.web_api.main import create_app
    except ImportError as e:
        print(f"error: preview server needs the api extra (pip install tagpress[api]): {e}", file=sys.stderr)
        return ExitCode.ERROR
    root = args.root.resolve()
    if not root.is_dir():
        print(f"error: site root does not exist: {root}", file=sys.stderr)
        return ExitCode.ERROR
    uvicorn.run(create_app(root), host=args.host, port=args.port)
    return ExitCode.SUCCESS


_HANDLERS = {
    "build": _handle_build,
    "posts": _handle_posts,
    "tags": _handle_tags,
    "validate": _handle_validate,
    "new": _handle_new,
    "serve": _handle_serve,
}


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 = ok, 1 = violations, 2 = error)."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command is None:
        parser.print_help(sys.stderr)
        return ExitCode.ERROR

    try:
        return _HANDLERS[args.command](args)
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR
    except TagpressError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
