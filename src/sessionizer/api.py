"""
sessionizer.api
===============

Programmatic entrypoints for hosts that embed the discovery engine.

Goals:
  - No argparse / CLI dependencies
  - JSON-friendly outputs (plain dicts and lists)
  - Every call validates its options against the config schema

Non-goals:
  - Rendering a picker or switching workspaces, the host owns both
  - Holding caches across calls (keep a ``Sessionizer`` handle for that)

Usage::

    from sessionizer.api import discover_projects, build_scan_command

    projects = discover_projects({"projects": ["~/code"], "default_depth": 2})
    argv = build_scan_command({"exclude_dirs": [".git"]}, "~/code")
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from sessionizer.contracts.load import validate_config
from sessionizer.core.config import BaseSpec
from sessionizer.core.workspace import Sessionizer
from sessionizer.switcher import launch_menu


def _handle(options: Optional[Mapping[str, Any]], **kwargs: Any) -> Sessionizer:
    opts = dict(options or {})
    validate_config(opts)
    return Sessionizer.from_options(opts, **kwargs)


def discover_projects(
    options: Optional[Mapping[str, Any]] = None, **kwargs: Any
) -> list[dict[str, str]]:
    """Scan every configured base and return ``{id, label, name}`` dicts.

    Extra keyword arguments (``which``, ``runner``, ``sleep``, ``home``)
    are forwarded to :class:`Sessionizer`.

    Raises
    ------
    jsonschema.ValidationError
        If *options* do not match the config schema.
    """
    return [entry.to_dict() for entry in _handle(options, **kwargs).all_dirs()]


def build_scan_command(
    options: Optional[Mapping[str, Any]],
    base: str | Mapping[str, Any],
    **kwargs: Any,
) -> list[str]:
    """Return the argv that would scan *base* under *options*."""
    sessionizer = _handle(options, **kwargs)
    spec = BaseSpec.from_option(base, sessionizer.config.default_depth)
    return sessionizer.engine.build_command(spec)


def launch_menu_entries(
    options: Optional[Mapping[str, Any]] = None, **kwargs: Any
) -> list[dict[str, Any]]:
    """Launch-menu items, or ``[]`` unless ``add_to_launch_menu`` is set."""
    sessionizer = _handle(options, **kwargs)
    if not sessionizer.config.add_to_launch_menu:
        return []
    return launch_menu(sessionizer.all_dirs(), sessionizer.config.launch_args)
