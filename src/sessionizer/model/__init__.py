"""Enums shared across the scan engine and host adapters."""

from __future__ import annotations

from enum import Enum


class ScanTool(str, Enum):
    """External program used to list directories under a base path."""

    INDEXER = "indexer"                  # fd
    FALLBACK_WALKER = "fallback_walker"  # find
    NATIVE_LISTER = "native_lister"      # PowerShell Get-ChildItem
