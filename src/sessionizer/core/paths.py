"""Path and platform helpers used when building scan commands.

Everything here is pure: no subprocesses, no filesystem access beyond
``os.path.expanduser``.
"""

from __future__ import annotations

import os
import re
from typing import Iterable, Sequence

# Last path component, tolerating trailing `/` or `\`.
_BASENAME_RE = re.compile(r"([^/\\]+)[/\\]*$")
# Characters `find -path` reads as glob syntax.
_GLOB_META_RE = re.compile(r"([*?\[\]\\])")

UNLIMITED_DEPTH = -1


def basename(path: str) -> str:
    """Return the final component of *path* (works for ``/`` and ``\\``)."""
    m = _BASENAME_RE.search(path)
    return m.group(1) if m else path


def strip_trailing_separators(path: str) -> str:
    stripped = path.rstrip("/\\")
    # Keep filesystem roots ("/", "C:\\") intact.
    if not stripped or stripped.endswith(":"):
        return path
    return stripped


def normalize_base_path(path: str) -> str:
    """Expand ``~`` and drop trailing separators from a configured base."""
    return strip_trailing_separators(os.path.expanduser(path))


def shorten_home(path: str, home: str) -> str:
    """Collapse a leading *home* prefix to ``~``.

    Only matches on a component boundary, so ``/home/user2`` is left alone
    when home is ``/home/user``.
    """
    if not home:
        return path
    home = strip_trailing_separators(home)
    if path == home:
        return "~"
    for sep in ("/", "\\"):
        prefix = home + sep
        if path.startswith(prefix):
            return "~" + sep + path[len(prefix):]
    return path


def depth_flags(
    requested: int | None, default_depth: int
) -> tuple[list[str], list[str]]:
    """Return ``(fd_flags, find_flags)`` limiting traversal depth.

    ``-1`` means unlimited and yields no flags at all; ``None`` falls back
    to *default_depth*.
    """
    depth = default_depth if requested is None else requested
    if depth == UNLIMITED_DEPTH:
        return [], []
    return ["--max-depth", str(depth)], ["-maxdepth", str(depth)]


def exclude_flags(exclude_dirs: Iterable[str], *, native: bool = False) -> list[str]:
    """One ``--exclude <name>`` pair per name (``-Exclude`` for PowerShell)."""
    flag = "-Exclude" if native else "--exclude"
    flags: list[str] = []
    for name in exclude_dirs:
        flags.extend((flag, name))
    return flags


def escape_glob(path: str) -> str:
    return _GLOB_META_RE.sub(r"\\\1", path)


def prune_flags(base: str, exclude_dirs: Sequence[str] | None) -> list[str]:
    """Build ``find`` prune groups for every excluded directory name.

    Each name gets a clause for ``<base>/<name>`` and one for nested
    occurrences (``find -path`` lets ``*`` match across ``/``). Every
    clause ends in ``-o`` so the caller can append ``-type d -print``.
    Glob characters in *base* are escaped so it matches literally.
    """
    base = escape_glob(base)
    flags: list[str] = []
    for name in exclude_dirs or ():
        for pattern in (f"{base}/{name}", f"{base}/*/{name}"):
            flags.extend(("(", "-path", pattern, "-prune", ")", "-o"))
    return flags


def checksum(identifiers: Iterable[str]) -> str:
    """Cheap rolling hash over identifiers, formatted as 8 hex digits."""
    h = 0
    for ident in identifiers:
        for byte in ident.encode("utf-8"):
            h = (h * 31 + byte) & 0xFFFFFFFF
    return f"{h:08x}"
