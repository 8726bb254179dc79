"""Load and validate instances against the bundled JSON schemas.

Usage::

    from tagpress.contracts.load import validate_instance, iter_errors

    validate_instance(manifest, "build_manifest.schema.json")
    problems = iter_errors(front_matter, "front_matter.schema.json")
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``data/schemas`` relative to the tagpress package root
    2. package data via importlib.resources (wheel / zip installs)
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("tagpress") / SCHEMA_DIR / name) as p:
        if p.exists():
            return p
    raise FileNotFoundError(f"schema not found: {name}")


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_instance(instance: Any, schema_name: str) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    jsonschema.validate(instance=instance, schema=load_schema(schema_name))


def iter_errors(instance: Any, schema_name: str) -> list[str]:
    """Return every violation of the named schema as ``"path: message"`` strings."""
    schema = load_schema(schema_name)
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)
    out: list[str] = []
    for err in sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path]):
        where = "/".join(str(p) for p in err.absolute_path) or "<root>"
        out.append(f"{where}: {err.message}")
    return out
