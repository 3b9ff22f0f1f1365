"""Command builders — one argv shape per :class:`ScanTool`.

Selection and construction are pure functions so they can be tested
without touching ``PATH`` or spawning anything.
"""

from __future__ import annotations

from typing import Callable, Sequence

from sessionizer.core.paths import depth_flags, prune_flags
from sessionizer.model import ScanTool

INDEXER_NAMES: tuple[str, ...] = ("fd", "fdfind")  # Debian/Ubuntu ship fd as fdfind
FALLBACK_WALKER = "find"
NATIVE_SHELL: tuple[str, ...] = ("powershell", "-NoProfile", "-Command")
NATIVE_LISTER = "Get-ChildItem"

# fd treats its first positional as a regex; "." matches every entry.
MATCH_ALL = "."


def select_tool(is_windows: bool, has_indexer: bool) -> ScanTool:
    """Pick the scan tool for a platform / tool-availability pair."""
    if is_windows:
        return ScanTool.NATIVE_LISTER
    if has_indexer:
        return ScanTool.INDEXER
    return ScanTool.FALLBACK_WALKER


def build_indexer_command(
    path: str,
    max_depth: int | None,
    default_depth: int,
    exclude: Sequence[str],
    *,
    program: str = INDEXER_NAMES[0],
) -> list[str]:
    """``fd --min-depth 1 [--max-depth N] -t d . <path> [--exclude <name>]...``

    *exclude* is the already-built flag vector, not the raw names.
    """
    fd_depth, _ = depth_flags(max_depth, default_depth)
    return [program, "--min-depth", "1", *fd_depth, "-t", "d", MATCH_ALL, path, *exclude]


def build_walker_command(
    path: str,
    max_depth: int | None,
    default_depth: int,
    exclude_dirs: Sequence[str],
) -> list[str]:
    """``find <path> -mindepth 1 [-maxdepth N] <prune groups> -type d -print``

    Prune groups must precede the print action or ``find`` ignores them.
    """
    _, find_depth = depth_flags(max_depth, default_depth)
    return [
        FALLBACK_WALKER,
        path,
        "-mindepth",
        "1",
        *find_depth,
        *prune_flags(path, exclude_dirs),
        "-type",
        "d",
        "-print",
    ]


def quote_powershell(value: str) -> str:
    """Single-quote *value* as a PowerShell verbatim string."""
    return "'" + value.replace("'", "''") + "'"


def build_lister_command(path: str, exclude: Sequence[str]) -> list[str]:
    """``powershell -Command "Get-ChildItem -LiteralPath '<path>' -Directory ..."``

    PowerShell joins ``-Command`` arguments with spaces after stripping
    their quotes, so the whole pipeline goes in as one string with every
    value single-quoted. Output is projected to ``FullName`` so each line
    is an absolute path.
    """
    parts = [NATIVE_LISTER, "-LiteralPath", quote_powershell(path), "-Directory"]
    flags = list(exclude)
    for flag, name in zip(flags[::2], flags[1::2]):
        parts.extend((flag, quote_powershell(name)))
    parts.extend(("|", "ForEach-Object", "FullName"))
    return [*NATIVE_SHELL, " ".join(parts)]


def probe_indexer(which: Callable[[str], str | None]) -> str | None:
    """Return the first indexer name resolvable on ``PATH``, else ``None``."""
    for name in INDEXER_NAMES:
        if which(name):
            return name
    return None
