"""sessionizer — discover project directories and hand them to a workspace picker."""

__all__ = [
    "__version__",
    "BaseSpec",
    "ScanEntry",
    "Sessionizer",
    "SessionizerConfig",
    "discover_projects",
    "build_scan_command",
    "launch_menu_entries",
]
__version__ = "0.1.0"

from sessionizer.core.config import BaseSpec, SessionizerConfig  # noqa: E402
from sessionizer.core.workspace import Sessionizer  # noqa: E402
from sessionizer.model.entry import ScanEntry  # noqa: E402

# Programmatic entrypoints for hosts.
from sessionizer.api import (  # noqa: E402
    build_scan_command,
    discover_projects,
    launch_menu_entries,
)
