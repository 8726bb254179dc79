"""
Preview server settings.
Every field can be overridden with a ``TAGPRESS_<FIELD>`` environment variable.
"""
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List

ENV_PREFIX = "TAGPRESS_"


def _coerce(raw: str, default):
    if isinstance(default, bool):
        return raw.lower() in ("true", "1", "yes")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, list):
        return [item.strip() for item in raw.split(",") if item.strip()]
    return raw


@dataclass
class Settings:
    """Preview server configuration"""

    HOST: str = "127.0.0.1"
    PORT: int = 4000
    DEBUG: bool = False

    # Site served when no root is passed to create_app()
    SITE_ROOT: str = "."

    CORS_ORIGINS: List[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self):
        """Apply environment overrides"""
        for f in fields(self):
            raw = os.getenv(ENV_PREFIX + f.name)
            if raw is not None:
                setattr(self, f.name, _coerce(raw, getattr(self, f.name)))

    @property
    def site_root(self) -> Path:
        return Path(self.SITE_ROOT).resolve()


settings = Settings()
