"""Load configuration files and validate them against the bundled schema.

Usage::

    from sessionizer.contracts.load import load_config, validate_config

    validate_config({"projects": ["~/code"]})
    config = load_config(Path("~/.config/sessionizer/config.yaml"))
"""

from __future__ import annotations

import json
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from sessionizer.core.config import SessionizerConfig

SCHEMA_DIR = "data/schemas"
CONFIG_SCHEMA = "sessionizer_config.schema.json"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``src/sessionizer/data/schemas/`` relative to this file
    2. pip-installed package data via importlib.resources
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(resources.files("sessionizer") / SCHEMA_DIR / name) as p:
        return p


def load_schema(name: str = CONFIG_SCHEMA) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    path = _schema_path(name)
    return json.loads(path.read_text(encoding="utf-8"))


def validate_config(options: Any, schema_name: str = CONFIG_SCHEMA) -> None:
    """Validate raw config *options*.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    jsonschema.validate(instance=options, schema=load_schema(schema_name))


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML, JSON or TOML config file into a dict.

    An empty file yields ``{}``.
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"config file does not exist: {path}")

    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    elif suffix == ".json":
        data = json.loads(text) if text.strip() else None
    elif suffix == ".toml":
        data = tomllib.loads(text)
    else:
        raise ValueError(f"{path}: unsupported config format {suffix!r} (use .yaml, .json or .toml)")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Path) -> SessionizerConfig:
    """Read, validate and normalize a config file."""
    options = read_config_file(path)
    validate_config(options)
    return SessionizerConfig.from_options(options)
