"""Exit code contract tests — enforce stable CLI exit semantics.

Code  Meaning
----  -------
  0   Success — built / listed / validated cleanly
  1   Violation — ``validate`` found problems
  2   Error — usage error, missing root, unusable content
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from tagpress.utils.exit_codes import ExitCode

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURE_SITE = REPO_ROOT / "tests" / "fixtures" / "site"


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    env = {**os.environ}
    env["PYTHONPATH"] = str(REPO_ROOT / "src") + (
        os.pathsep + env["PYTHONPATH"] if env.get("PYTHONPATH") else ""
    )
    return subprocess.run(
        [sys.executable, "-m", "tagpress", *args],
        capture_output=True,
        text=True,
        env=env,
    )


def test_enum_values_are_stable() -> None:
    assert [int(c) for c in ExitCode] == [0, 1, 2]


def test_for_problems() -> None:
    assert ExitCode.for_problems([]) is ExitCode.SUCCESS
    assert ExitCode.for_problems(["x: broken"]) is ExitCode.VIOLATION


class TestValidateExitCodes:
    def test_clean_site_exits_0(self) -> None:
        assert _run("validate", str(FIXTURE_SITE)).returncode == ExitCode.SUCCESS

    def test_bad_front_matter_exits_1(self, tmp_path: Path) -> None:
        (tmp_path / "_posts").mkdir()
        (tmp_path / "_posts" / "2024-01-01-a.md").write_text("---\ntags: {a: 1}\n---\n", encoding="utf-8")
        r = _run("validate", str(tmp_path))
        assert r.returncode == ExitCode.VIOLATION, r.stderr
        assert r.stderr.startswith("FAIL: ")

    def test_missing_root_exits_2(self, tmp_path: Path) -> None:
        assert _run("validate", str(tmp_path / "nope")).returncode == ExitCode.ERROR


class TestBuildExitCodes:
    def test_unusable_content_exits_2(self, tmp_path: Path) -> None:
        (tmp_path / "_posts").mkdir()
        (tmp_path / "_posts" / "undated.md").write_text("body\n", encoding="utf-8")
        r = _run("build", str(tmp_path))
        assert r.returncode == ExitCode.ERROR
        assert "post has no date" in r.stderr

    @pytest.mark.parametrize("argv", [[], ["build", "--bogus-flag"]])
    def test_usage_errors_exit_2(self, argv: list[str]) -> None:
        assert _run(*argv).returncode == ExitCode.ERROR
