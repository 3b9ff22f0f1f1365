"""Scan engine — turns one base path into a list of ``ScanEntry``.

Owns the memoized tool probe, the exclude-flag vector and the
per-(base, depth) result cache. One engine per :class:`Sessionizer`
handle; nothing lives at module level.
"""

from __future__ import annotations

import logging
import shutil
import threading
from pathlib import Path
from typing import Callable

from sessionizer.core.commands import (
    INDEXER_NAMES,
    build_indexer_command,
    build_lister_command,
    build_walker_command,
    probe_indexer,
    select_tool,
)
from sessionizer.core.config import BaseSpec, SessionizerConfig
from sessionizer.core.execute import (
    DEFAULT_ATTEMPTS,
    DEFAULT_DELAY_MS,
    Runner,
    run_with_retry,
)
from sessionizer.core.paths import exclude_flags as _exclude_flags
from sessionizer.model import ScanTool
from sessionizer.model.entry import ScanEntry

_logger = logging.getLogger(__name__)

ScanCacheKey = tuple[str, int | str]


def cache_key(base: BaseSpec) -> ScanCacheKey:
    return (base.path, "default" if base.max_depth is None else base.max_depth)


class ScanEngine:
    """Builds, runs and caches directory scans for a single configuration."""

    def __init__(
        self,
        config: SessionizerConfig,
        *,
        which: Callable[[str], str | None] = shutil.which,
        runner: Runner | None = None,
        sleep: Callable[[float], None] | None = None,
        home: str | None = None,
        attempts: int = DEFAULT_ATTEMPTS,
        delay_ms: int = DEFAULT_DELAY_MS,
    ):
        self.config = config
        self.home = str(Path.home()) if home is None else home
        self.attempts = attempts
        self.delay_ms = delay_ms
        self._which = which
        self._runner = runner
        self._sleep = sleep
        self._lock = threading.Lock()
        # Probed once per engine; `_probed` distinguishes "absent" from "not yet probed".
        self._probed = False
        self._indexer: str | None = None
        self._exclude_flags: list[str] | None = None
        self._cache: dict[ScanCacheKey, list[ScanEntry]] = {}

    # ── tool selection ──────────────────────────────────────────────

    def has_indexer(self) -> bool:
        """True when ``fd`` (or ``fdfind``) is on ``PATH``. Never re-probed."""
        with self._lock:
            if not self._probed:
                self._indexer = probe_indexer(self._which)
                self._probed = True
                _logger.debug("indexer probe: %s", self._indexer or "not found")
            return self._indexer is not None

    def tool(self) -> ScanTool:
        if self.config.is_windows:
            return ScanTool.NATIVE_LISTER
        return select_tool(False, self.has_indexer())

    def exclude_flags(self) -> list[str]:
        with self._lock:
            if self._exclude_flags is None:
                self._exclude_flags = _exclude_flags(
                    self.config.exclude_dirs, native=self.config.is_windows
                )
            return list(self._exclude_flags)

    # ── command construction ────────────────────────────────────────

    def build_command(self, base: BaseSpec) -> list[str]:
        """Return the exact argv that scans *base*."""
        tool = self.tool()
        if tool is ScanTool.NATIVE_LISTER:
            return build_lister_command(base.path, self.exclude_flags())
        if tool is ScanTool.INDEXER:
            return build_indexer_command(
                base.path,
                base.max_depth,
                self.config.default_depth,
                self.exclude_flags(),
                program=self._indexer or INDEXER_NAMES[0],
            )
        return build_walker_command(
            base.path,
            base.max_depth,
            self.config.default_depth,
            self.config.exclude_dirs,
        )

    # ── scanning ────────────────────────────────────────────────────

    def scan_base(self, base: BaseSpec) -> list[ScanEntry]:
        """Scan *base*, serving repeats from the cache.

        Command failures are logged and yield ``[]``; failures are not
        cached so the next call retries.
        """
        key = cache_key(base)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return list(cached)

        result = run_with_retry(
            self.build_command(base),
            self.attempts,
            self.delay_ms,
            runner=self._runner,
            sleep=self._sleep,
        )
        if not result.ok:
            _logger.error("Failed to scan: %s (%s)", base.path, result.error)
            return []

        entries = self.parse_output(result.output or "")
        with self._lock:
            self._cache[key] = entries
        _logger.debug("scanned %s: %d directories", base.path, len(entries))
        return list(entries)

    def parse_output(self, output: str) -> list[ScanEntry]:
        return [
            ScanEntry.from_line(line, self.home)
            for line in output.splitlines()
            if line.strip()
        ]

    def clear_cache(self) -> None:
        """Drop cached scans and the exclude-flag memo (the tool probe stays)."""
        with self._lock:
            self._cache.clear()
            self._exclude_flags = None

    def reconfigure(self, config: SessionizerConfig) -> None:
        self.config = config
        self.clear_cache()
