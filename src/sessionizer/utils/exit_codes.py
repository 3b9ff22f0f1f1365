"""Exit-code contract for every CLI command.

Code  Meaning
----  -------
  0   Success — projects listed / config valid
  1   Empty or violation — no projects found, schema violation
  2   Error — usage error, missing file, unreadable config
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    EMPTY = 1
    VIOLATION = 1
    ERROR = 2
