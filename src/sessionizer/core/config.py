"""Sessionizer configuration dataclasses."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from sessionizer.core.paths import normalize_base_path

DEFAULT_DEPTH = 3

# Directory names skipped while scanning (VCS metadata, editor state, build output).
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    ".git",
    "node_modules",
    ".vscode",
    ".svn",
    ".hg",
    ".idea",
    ".DS_Store",
    "__pycache__",
    "target",
    "build",
)

DEFAULT_LAUNCH_ARGS: tuple[str, ...] = ("nvim",)


def _default_is_windows() -> bool:
    return os.name == "nt"


@dataclass(frozen=True, slots=True)
class BaseSpec:
    """A configured root directory and how deep to look under it.

    ``max_depth`` of ``None`` means "use the configured default"; ``-1``
    means unlimited.
    """

    path: str
    max_depth: Optional[int] = None

    @classmethod
    def from_option(cls, raw: Any, default_depth: int | None = None) -> "BaseSpec":
        """Build from a bare path string or a ``{path, max_depth}`` mapping."""
        if isinstance(raw, BaseSpec):
            path, depth = raw.path, raw.max_depth
        elif isinstance(raw, (str, os.PathLike)):
            path, depth = os.fspath(raw), None
        elif isinstance(raw, Mapping):
            if "path" not in raw:
                raise ValueError(f"project entry is missing 'path': {raw!r}")
            path, depth = raw["path"], raw.get("max_depth")
        else:
            raise ValueError(f"unsupported project entry: {raw!r}")

        if not isinstance(path, (str, os.PathLike)) or not os.fspath(path):
            raise ValueError(f"project path must be a non-empty string: {raw!r}")
        if depth is not None and (isinstance(depth, bool) or not isinstance(depth, int)):
            raise ValueError(f"max_depth must be an integer: {raw!r}")
        if depth is None:
            depth = default_depth
        return cls(path=normalize_base_path(os.fspath(path)), max_depth=depth)


@dataclass(frozen=True)
class SessionizerConfig:
    """Immutable discovery configuration.

    Built once per :meth:`Sessionizer.apply_config` call; the caches hang
    off the handle, not off this object.
    """

    projects: tuple[BaseSpec, ...] = ()
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    default_depth: int = DEFAULT_DEPTH
    is_windows: bool = field(default_factory=_default_is_windows)
    add_to_launch_menu: bool = False
    launch_args: tuple[str, ...] = DEFAULT_LAUNCH_ARGS
    scan_workers: int = 1

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "SessionizerConfig":
        """Build a config from user options, falling back to defaults.

        Fields that are absent or ``None`` take their built-in default.
        Project entries are normalized with the effective default depth.
        """
        opts = dict(options or {})

        default_depth = opts.get("default_depth")
        if default_depth is None:
            default_depth = DEFAULT_DEPTH
        if isinstance(default_depth, bool) or not isinstance(default_depth, int):
            raise ValueError(f"default_depth must be an integer, got {default_depth!r}")

        exclude = opts.get("exclude_dirs")
        exclude_dirs = DEFAULT_EXCLUDE_DIRS if exclude is None else tuple(str(d) for d in exclude)

        projects = tuple(
            BaseSpec.from_option(raw, default_depth) for raw in (opts.get("projects") or ())
        )

        is_windows = opts.get("is_windows")
        launch_args = opts.get("launch_args")
        workers = opts.get("scan_workers") or 1
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ValueError(f"scan_workers must be a positive integer, got {workers!r}")

        return cls(
            projects=projects,
            exclude_dirs=exclude_dirs,
            default_depth=default_depth,
            is_windows=_default_is_windows() if is_windows is None else bool(is_windows),
            add_to_launch_menu=bool(opts.get("add_to_launch_menu", False)),
            launch_args=DEFAULT_LAUNCH_ARGS if launch_args is None else tuple(launch_args),
            scan_workers=workers,
        )


@dataclass
class Settings:
    """Process settings for the CLI. Environment variables override defaults."""

    SESSIONIZER_CONFIG: str = "~/.config/sessionizer/config.yaml"
    SESSIONIZER_LOG_LEVEL: str = "WARNING"

    def __post_init__(self):
        """Load from environment variables"""
        for key in self.__dataclass_fields__:
            env_value = os.getenv(key)
            if env_value:
                setattr(self, key, env_value)

    @property
    def config_path(self) -> Path:
        return Path(self.SESSIONIZER_CONFIG).expanduser()

    @property
    def log_level(self) -> int:
        level = logging.getLevelName(self.SESSIONIZER_LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.WARNING
