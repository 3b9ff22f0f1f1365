"""CLI entry-point for sessionizer.

Usage:
    python -m sessionizer list [--config FILE] [--format text|tsv|json]
    python -m sessionizer list --project ~/code --project ~/work --depth 2
    python -m sessionizer command <base> [--depth N] [--config FILE]
    python -m sessionizer validate <config-file>
    python -m sessionizer menu [--config FILE]

``list --format tsv`` prints ``<id>\\t<label>`` lines, ready for a fuzzy
picker such as ``fzf --with-nth 2``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import jsonschema

from sessionizer import __version__
from sessionizer.contracts.load import read_config_file, validate_config
from sessionizer.core.config import BaseSpec, Settings
from sessionizer.core.workspace import Sessionizer
from sessionizer.switcher import launch_menu
from sessionizer.utils.exit_codes import ExitCode
from sessionizer.utils.json_norm import stable_json_dump, stable_json_dumps

_logger = logging.getLogger("sessionizer")


def _setup_logging(verbose: bool, settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (.yaml, .json, .toml). Default: $SESSIONIZER_CONFIG "
        "or ~/.config/sessionizer/config.yaml when present.",
    )
    p.add_argument(
        "--project",
        dest="projects",
        action="append",
        default=None,
        help="Project base directory (repeatable). Overrides configured projects.",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_dirs",
        action="append",
        default=None,
        help="Directory name to skip (repeatable). Overrides configured exclusions.",
    )
    p.add_argument(
        "--depth",
        dest="default_depth",
        type=int,
        default=None,
        help="Default max depth (-1 = unlimited).",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sessionizer",
        description="Discover project directories and list them for a workspace picker.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log debug output to stderr.",
    )
    sub = p.add_subparsers(dest="command")

    list_p = sub.add_parser("list", help="List discovered project directories.")
    _add_config_args(list_p)
    list_p.add_argument(
        "--format",
        choices=("text", "tsv", "json"),
        default="text",
        help="Output format (default: text, one label per line).",
    )

    cmd_p = sub.add_parser("command", help="Print the scan command for a base path.")
    cmd_p.add_argument("base", help="Base directory to scan.")
    _add_config_args(cmd_p)

    val_p = sub.add_parser("validate", help="Validate a config file against the schema.")
    val_p.add_argument("file", type=Path, help="Config file to validate.")

    menu_p = sub.add_parser(
        "menu",
        help="Print launch-menu entries as JSON (empty unless add_to_launch_menu is set).",
    )
    _add_config_args(menu_p)

    return p


def _load_options(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    """Merge the config file (if any) with command-line overrides and validate."""
    if args.config is not None:
        options = read_config_file(args.config)
    elif settings.config_path.exists():
        options = read_config_file(settings.config_path)
    else:
        _logger.debug("no config file at %s, using defaults", settings.config_path)
        options = {}

    for key in ("projects", "exclude_dirs", "default_depth"):
        value = getattr(args, key, None)
        if value is not None:
            options[key] = value

    validate_config(options)
    return options


def _print_entries(entries: list, fmt: str) -> None:
    if fmt == "json":
        stable_json_dump([e.to_dict() for e in entries], sys.stdout)
    elif fmt == "tsv":
        for e in entries:
            print(f"{e.identifier}\t{e.label}")
    else:
        for e in entries:
            print(e.label)


def _handle_list(args: argparse.Namespace, options: dict[str, Any]) -> int:
    sessionizer = Sessionizer.from_options(options)
    if not sessionizer.config.projects:
        print("error: no project base directories configured.", file=sys.stderr)
        return ExitCode.ERROR

    entries = sessionizer.all_dirs()
    if not entries:
        print("no projects found", file=sys.stderr)
        return ExitCode.EMPTY

    _print_entries(entries, args.format)
    return ExitCode.SUCCESS


def _handle_command(args: argparse.Namespace, options: dict[str, Any]) -> int:
    sessionizer = Sessionizer.from_options(options)
    base = BaseSpec.from_option(args.base, sessionizer.config.default_depth)
    sys.stdout.write(stable_json_dumps(sessionizer.engine.build_command(base), indent=None))
    return ExitCode.SUCCESS


def _handle_menu(options: dict[str, Any]) -> int:
    sessionizer = Sessionizer.from_options(options)
    if not sessionizer.config.add_to_launch_menu:
        stable_json_dump([], sys.stdout)
        print("launch menu disabled (set add_to_launch_menu: true)", file=sys.stderr)
        return ExitCode.EMPTY
    entries = sessionizer.all_dirs()
    stable_json_dump(launch_menu(entries, sessionizer.config.launch_args), sys.stdout)
    return ExitCode.SUCCESS if entries else ExitCode.EMPTY


def _handle_validate(args: argparse.Namespace) -> int:
    # Exit code contract:
    #   1 = schema violation
    #   2 = missing / unreadable file
    try:
        validate_config(read_config_file(args.file))
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (see ``utils.exit_codes``)."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = Settings()
    _setup_logging(args.verbose, settings)

    if args.command is None:
        parser.print_usage(sys.stderr)
        return ExitCode.ERROR

    if args.command == "validate":
        return _handle_validate(args)

    try:
        options = _load_options(args, settings)
    except jsonschema.ValidationError as e:
        print(f"error: invalid config: {e.message}", file=sys.stderr)
        return ExitCode.ERROR
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    if args.command == "list":
        return _handle_list(args, options)
    if args.command == "command":
        return _handle_command(args, options)
    if args.command == "menu":
        return _handle_menu(options)

    parser.print_usage(sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
