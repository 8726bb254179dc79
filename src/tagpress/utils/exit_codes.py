"""Process exit codes shared by every ``tagpress`` subcommand.

Code  Meaning
----  -------
  0   Success — site built / listed / validated cleanly
  1   Violation — ``validate`` found problems in the content
  2   Error — usage error, missing root, bad front matter, build failure
"""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2

    @classmethod
    def for_problems(cls, problems: Sequence[str]) -> "ExitCode":
        """``VIOLATION`` when a check reported anything, else ``SUCCESS``."""
        return cls.VIOLATION if problems else cls.SUCCESS
