"""Glue between the discovery handle and a host UI.

The host supplies the fuzzy picker and the notification sink; this module
only shapes data for them and for the host's "switch to workspace" action.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, Sequence

from sessionizer.core.workspace import Sessionizer
from sessionizer.model.entry import ScanEntry

_logger = logging.getLogger(__name__)

NOTIFY_TITLE = "Sessionizer"
NO_WORKSPACES_MESSAGE = "No workspaces found"
NOTIFY_TIMEOUT_MS = 3000
SELECTOR_TITLE = "Sessionizer"


class Notifier(Protocol):
    def notify(self, title: str, message: str, timeout_ms: int) -> None: ...


class Selector(Protocol):
    def select(
        self, title: str, choices: Sequence[Mapping[str, str]]
    ) -> Optional[tuple[str, str]]:
        """Return ``(id, label)`` of the picked choice, or None on cancel."""
        ...


def _expand_home(path: str, home: str | None) -> str:
    if home and (path == "~" or path.startswith("~/") or path.startswith("~\\")):
        return home + path[1:]
    return os.path.expanduser(path)


def switch_request(
    identifier: str | None, label: str | None, *, home: str | None = None
) -> Optional[dict[str, Any]]:
    """Describe a "switch to workspace" action for the host.

    The workspace is named after the full identifier so two projects with
    the same basename never collide.
    """
    if not identifier:
        _logger.warning("No workspace ID provided for switch")
        return None
    return {
        "name": identifier,
        "spawn": {
            "label": f"Workspace: {label or identifier}",
            "cwd": _expand_home(identifier, home),
        },
    }


def make_switcher(
    sessionizer: Sessionizer,
    selector: Selector,
    notifier: Notifier,
) -> Callable[[], Optional[dict[str, Any]]]:
    """Build the zero-argument callback a host binds to a key.

    Returns the switch request for the chosen project, or None when there
    is nothing to pick or the user cancels.
    """

    def _switch() -> Optional[dict[str, Any]]:
        choices = sessionizer.choices()
        if not choices:
            notifier.notify(NOTIFY_TITLE, NO_WORKSPACES_MESSAGE, NOTIFY_TIMEOUT_MS)
            return None

        picked = selector.select(SELECTOR_TITLE, choices)
        if picked is None:
            _logger.info("selection cancelled")
            return None
        ident, label = picked
        return switch_request(ident, label, home=sessionizer.engine.home)

    return _switch


def launch_menu(entries: Iterable[ScanEntry], args: Sequence[str]) -> list[dict[str, Any]]:
    """Launch-menu items: one per project, opening *args* in its directory."""
    return [
        {
            "label": f"Workspace: {entry.derived_name}",
            "cwd": entry.identifier,
            "args": list(args),
        }
        for entry in entries
    ]
