"""Site configuration dataclass, loaded from ``_config.yml``."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import jsonschema
import yaml

from tagpress.contracts.load import validate_instance
from tagpress.errors import ConfigError

_logger = logging.getLogger(__name__)

CONFIG_FILENAME = "_config.yml"
ENV_PREFIX = "TAGPRESS_"

DEFAULT_MARKDOWN_EXTENSIONS: tuple[str, ...] = (
    "extra",
    "sane_lists",
    "smarty",
    "toc",
)


@dataclass(frozen=True)
class SiteConfig:
    """Immutable site configuration.

    Field names follow the keys a Jekyll ``_config.yml`` already uses, so an
    existing config file loads without edits.  Unknown keys are ignored.
    """

    title: str = "My Blog"
    description: str = ""
    author: str = ""
    url: str = ""                 # scheme + host, no trailing slash
    baseurl: str = ""             # path prefix, e.g. "/blog"
    permalink: str = "/:year/:month/:day/:title/"
    paginate: int = 10            # posts per index page; 0 = single page
    excerpt_separator: str = "\n\n"
    date_format: str = "%b %-d, %Y"
    posts_dir: str = "_posts"
    drafts_dir: str = "_drafts"
    output_dir: str = "_site"
    templates_dir: str = ""       # optional override of packaged templates
    show_drafts: bool = False
    feed: bool = True
    markdown_extensions: tuple[str, ...] = DEFAULT_MARKDOWN_EXTENSIONS
    exclude: tuple[str, ...] = ()

    # ── construction ────────────────────────────────────────────────

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SiteConfig":
        """Build a config from a parsed mapping, validating it first."""
        try:
            validate_instance(dict(data), "site_config.schema.json")
        except jsonschema.ValidationError as e:
            where = "/".join(str(p) for p in e.absolute_path) or "<root>"
            raise ConfigError(f"invalid site config at {where}: {e.message}") from e

        known = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                continue
            if isinstance(value, list):
                value = tuple(value)
            kwargs[key] = value
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Path) -> "SiteConfig":
        """Load configuration from a YAML file.  A missing file gives defaults."""
        if not path.exists():
            _logger.debug("no config at %s, using defaults", path)
            return cls()
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"{path.as_posix()}: invalid YAML: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigError(f"{path.as_posix()}: not valid UTF-8: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path.as_posix()}: top level must be a mapping")
        return cls.from_mapping(data)

    @classmethod
    def discover(cls, root: Path) -> "SiteConfig":
        """Load ``<root>/_config.yml`` and apply environment overrides."""
        return cls.from_yaml(root / CONFIG_FILENAME).with_env()

    def with_env(self, environ: Mapping[str, str] | None = None) -> "SiteConfig":
        """Return a copy with ``TAGPRESS_<FIELD>`` environment overrides applied."""
        env = os.environ if environ is None else environ
        changes: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            current = getattr(self, f.name)
            if isinstance(current, bool):
                changes[f.name] = raw.lower() in ("true", "1", "yes", "on")
            elif isinstance(current, int):
                try:
                    changes[f.name] = int(raw)
                except ValueError as e:
                    raise ConfigError(
                        f"{ENV_PREFIX}{f.name.upper()} must be an integer, got {raw!r}"
                    ) from e
            elif isinstance(current, tuple):
                changes[f.name] = tuple(s.strip() for s in raw.split(",") if s.strip())
            else:
                changes[f.name] = raw
        return dataclasses.replace(self, **changes) if changes else self

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        d = dataclasses.asdict(self)
        for key, value in d.items():
            if isinstance(value, tuple):
                d[key] = list(value)
        return d
