"""Command execution with bounded retry.

Failures never raise: callers get a ``CommandResult`` and decide how to
degrade.
"""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

_logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 3
DEFAULT_DELAY_MS = 200

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of :func:`run_with_retry`."""

    ok: bool
    output: Optional[str]
    attempts: int
    error: str = ""


def _run_once(command: Sequence[str], runner: Runner) -> tuple[bool, str, str]:
    try:
        proc = runner(list(command), capture_output=True, text=True)
    except OSError as e:
        return False, "", str(e)
    if proc.returncode != 0:
        return False, "", (proc.stderr or "").strip() or f"exit code {proc.returncode}"
    return True, proc.stdout or "", ""


def run_with_retry(
    command: Sequence[str],
    max_attempts: int = DEFAULT_ATTEMPTS,
    delay_ms: int = DEFAULT_DELAY_MS,
    *,
    runner: Runner | None = None,
    sleep: Callable[[float], None] | None = None,
) -> CommandResult:
    """Run *command*, retrying up to *max_attempts* times.

    The delay between attempts is constant (*delay_ms*); there is no
    backoff and no per-attempt timeout.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    run = runner or subprocess.run
    pause = sleep or time.sleep
    cmd_text = " ".join(command)
    last_error = ""

    for attempt in range(1, max_attempts + 1):
        ok, output, last_error = _run_once(command, run)
        if ok:
            return CommandResult(ok=True, output=output, attempts=attempt)
        if attempt < max_attempts:
            _logger.warning(
                "Retrying: %s (attempt %d/%d): %s",
                cmd_text,
                attempt,
                max_attempts,
                last_error,
            )
            pause(delay_ms / 1000)

    return CommandResult(ok=False, output=None, attempts=max_attempts, error=last_error)
