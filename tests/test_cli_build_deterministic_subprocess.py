"""Subprocess determinism test: ``tagpress build --ci`` produces byte-identical trees."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def _run(cmd: list[str], *, cwd: Path) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONHASHSEED"] = "0"
    env["TAGPRESS_DETERMINISTIC"] = "1"
    env["PYTHONPATH"] = str(REPO_ROOT / "src")
    return subprocess.run(cmd, cwd=str(cwd), env=env, text=True, capture_output=True)


def _tree(root: Path) -> dict[str, bytes]:
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


def test_cli_build_is_byte_deterministic_under_ci(tmp_path: Path) -> None:
    """Runs ``build`` twice from the environment flag and compares the output trees."""

    fixture = REPO_ROOT / "tests" / "fixtures" / "site"
    work = tmp_path / "site"
    shutil.copytree(fixture, work)

    r1 = _run([sys.executable, "-m", "tagpress", "build", ".", "--out", "../out_a"], cwd=work)
    assert r1.returncode == 0, (r1.stdout, r1.stderr)
    r2 = _run([sys.executable, "-m", "tagpress", "build", ".", "--out", "../out_b"], cwd=work)
    assert r2.returncode == 0, (r2.stdout, r2.stderr)

    a, b = _tree(tmp_path / "out_a"), _tree(tmp_path / "out_b")
    assert a == b
    assert "manifest.json" in a
    assert b'"build_id": "ci-' in a["manifest.json"]
