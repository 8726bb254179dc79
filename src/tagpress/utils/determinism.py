"""Determinism utilities for CI-reproducible builds.

When ``--ci`` / ``--deterministic`` is passed (or ``TAGPRESS_DETERMINISTIC=1``
is set):

- the manifest timestamp is fixed to a known epoch
- the build id is derived from the hash of the written files
- output paths are hashed in sorted POSIX order

so two builds of the same content produce byte-identical output trees.
"""

from __future__ import annotations

import hashlib
import os
import uuid
from datetime import datetime, timezone
from typing import Iterable

# Fixed timestamp for CI mode (ISO 8601 with timezone)
FIXED_TIMESTAMP = "2000-01-01T00:00:00+00:00"


def env_requires_ci_mode() -> bool:
    """Return True when the environment asks for deterministic output."""
    if os.environ.get("TAGPRESS_DETERMINISTIC", "").lower() in ("1", "true", "yes"):
        return True
    return os.environ.get("CI_MODE", "").lower() in ("1", "true", "yes")


def deterministic_timestamp(ci_mode: bool = False) -> str:
    """Return FIXED_TIMESTAMP in CI mode, else the current UTC time."""
    if ci_mode:
        return FIXED_TIMESTAMP
    return datetime.now(timezone.utc).isoformat()


def deterministic_build_id(files: Iterable[tuple[str, bytes]], ci_mode: bool = False) -> str:
    """Generate a build ID.

    In CI mode the ID is a digest over ``(relative_path, content)`` pairs, so
    identical output trees share an ID.  Otherwise it is random.
    """
    if not ci_mode:
        return f"build-{uuid.uuid4().hex[:16]}"
    h = hashlib.sha256()
    for rel, data in sorted(files):
        h.update(rel.encode("utf-8"))
        h.update(b"\0")
        h.update(hashlib.sha256(data).digest())
    return f"ci-{h.hexdigest()[:16]}"

