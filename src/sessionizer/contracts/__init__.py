"""Configuration schema contracts."""
