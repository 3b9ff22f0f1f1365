"""Workspace aggregator — the discovery handle callers hold on to.

``Sessionizer`` owns the configuration, the scan engine and the aggregate
cache. Each handle is independent, so tests (and hosts with several
profiles) can keep separate caches side by side.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Mapping

from sessionizer.core.config import BaseSpec, SessionizerConfig
from sessionizer.core.execute import Runner
from sessionizer.core.paths import checksum
from sessionizer.core.scanner import ScanEngine
from sessionizer.model.entry import BaseScanResult, ScanEntry

_logger = logging.getLogger(__name__)


def dedupe(results: list[BaseScanResult]) -> list[ScanEntry]:
    """Flatten per-base results; the first occurrence of an identifier wins."""
    seen: set[str] = set()
    merged: list[ScanEntry] = []
    for result in results:
        for entry in result.entries:
            if entry.identifier in seen:
                continue
            seen.add(entry.identifier)
            merged.append(entry)
    return merged


class Sessionizer:
    """Discovery handle: configuration plus both cache layers."""

    def __init__(
        self,
        config: SessionizerConfig | None = None,
        *,
        which: Callable[[str], str | None] | None = None,
        runner: Runner | None = None,
        sleep: Callable[[float], None] | None = None,
        home: str | None = None,
    ):
        self.config = config or SessionizerConfig()
        engine_kwargs: dict[str, Any] = {"runner": runner, "sleep": sleep, "home": home}
        if which is not None:
            engine_kwargs["which"] = which
        self.engine = ScanEngine(self.config, **engine_kwargs)
        self._lock = threading.Lock()
        self._cached: tuple[ScanEntry, ...] | None = None
        self._cached_checksum: str | None = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None, **kwargs: Any) -> "Sessionizer":
        return cls(SessionizerConfig.from_options(options), **kwargs)

    # ── configuration lifecycle ─────────────────────────────────────

    def apply_config(self, options: Mapping[str, Any] | None) -> SessionizerConfig:
        """Replace the configuration and invalidate every cache."""
        config = SessionizerConfig.from_options(options)
        with self._lock:
            self.config = config
            self._cached = None
            self._cached_checksum = None
        self.engine.reconfigure(config)
        _logger.info("applied config: %d project base(s)", len(config.projects))
        return config

    def clear_cache(self) -> None:
        with self._lock:
            self._cached = None
            self._cached_checksum = None
        self.engine.clear_cache()

    @property
    def cache_checksum(self) -> str | None:
        return self._cached_checksum

    # ── scanning ────────────────────────────────────────────────────

    def _scan_one(self, base: BaseSpec) -> BaseScanResult:
        try:
            return BaseScanResult(base=base, entries=tuple(self.engine.scan_base(base)))
        except Exception as e:
            _logger.exception("Failed to scan project base: %s", base.path)
            return BaseScanResult(base=base, error=f"{type(e).__name__}: {e}")

    def scan_all(self) -> list[BaseScanResult]:
        """Scan every configured base, one result per base in configured order."""
        bases = list(self.config.projects)
        workers = min(self.config.scan_workers, len(bases))
        if workers <= 1:
            return [self._scan_one(base) for base in bases]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields in submission order, not completion order.
            return list(pool.map(self._scan_one, bases))

    def _cache_valid(self) -> bool:
        if self._cached is None:
            return False
        return checksum(e.identifier for e in self._cached) == self._cached_checksum

    def all_dirs(self) -> list[ScanEntry]:
        """All discovered directories across bases, deduplicated by identifier.

        Served from the aggregate cache until :meth:`clear_cache` or
        :meth:`apply_config` runs. Never raises; failed bases contribute
        nothing.
        """
        with self._lock:
            if self._cache_valid():
                return list(self._cached or ())

        merged = dedupe(self.scan_all())
        with self._lock:
            self._cached = tuple(merged)
            self._cached_checksum = checksum(e.identifier for e in merged)
        return list(merged)

    def choices(self) -> list[dict[str, str]]:
        """``{id, label}`` pairs for a fuzzy picker."""
        return [entry.to_choice() for entry in self.all_dirs()]
