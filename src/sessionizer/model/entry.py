"""ScanEntry — one discovered project directory."""

from __future__ import annotations

from dataclasses import dataclass, field

from sessionizer.core.config import BaseSpec
from sessionizer.core.paths import basename, shorten_home, strip_trailing_separators


@dataclass(frozen=True, slots=True)
class ScanEntry:
    """Immutable discovered directory.

    ``identifier`` is the absolute path as reported by the scan tool and is
    the dedup key; ``label`` is what the picker shows.
    """

    identifier: str
    label: str
    derived_name: str

    @classmethod
    def from_line(cls, line: str, home: str) -> "ScanEntry":
        ident = strip_trailing_separators(line)
        return cls(
            identifier=ident,
            label=shorten_home(ident, home),
            derived_name=basename(ident),
        )

    def to_choice(self) -> dict[str, str]:
        return {"id": self.identifier, "label": self.label}

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.identifier,
            "label": self.label,
            "name": self.derived_name,
        }


@dataclass(frozen=True)
class BaseScanResult:
    """Per-base outcome: entries on success, a reason on failure."""

    base: BaseSpec
    entries: tuple[ScanEntry, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
