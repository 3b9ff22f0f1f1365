"""Shared utilities for sessionizer."""
