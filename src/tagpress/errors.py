"""Exception hierarchy raised by the loading and build layers."""

from __future__ import annotations

from pathlib import Path


class TagpressError(Exception):
    """Base class for all tagpress failures."""


class FrontMatterError(TagpressError, ValueError):
    """A content file has unusable front matter or is missing a date."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"{self.path.as_posix()}: {message}")


class BuildError(TagpressError):
    """The site cannot be written (URL collision, unsafe output path, ...)."""


class ConfigError(TagpressError, ValueError):
    """``_config.yml`` is unreadable or does not match its schema."""
