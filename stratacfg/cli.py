# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line interface for stratacfg.

This module provides the main CLI entry point for the stratacfg tool,
offering commands to inspect and change layered configuration files.

Commands:

    get: Print the effective value of a key
    set: Change a key and save it to a writable overlay
    show: Print every effective key and value

Example:
    Read a value with a user overlay applied:
        ```bash
        $ stratacfg get Editor.cfg MainWindow.Size.Width --overlay ~/.config/Editor
        ```

    Read a typed value:
        ```bash
        $ stratacfg get Editor.cfg MainWindow.Font.Size --type float
        ```

    Change a value for the current user:
        ```bash
        $ stratacfg set Editor.cfg MainWindow.Size.Width 1024 --save-dir ~/.config/Editor
        ```

    List everything:
        ```bash
        $ stratacfg show Editor.cfg --overlay ~/.config/Editor --verbose
        ```

Exit Codes:

- 0: Success
- 1: Error (missing file, malformed document, unknown key, bad value)

Note:
    Handlers (cmd_<command>) return the exit code; main() exits with it.
    Errors are reported as "Error: <message>"; --verbose or --debug adds
    the traceback.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys

from stratacfg import __version__
from stratacfg.config_file import ConfigFile
from stratacfg.exceptions import StrataCfgError
from stratacfg.logging import get_logger, set_global_logger
from stratacfg.providers import available_formats, get_provider

_TYPES: dict[str, type] = {"str": str, "int": int, "float": float, "bool": bool}


def _package_version() -> str:
    try:
        return version("stratacfg")
    except PackageNotFoundError:
        return __version__


def _open_file(args: argparse.Namespace) -> ConfigFile:
    """Load the definition file and apply --overlay directories in order."""
    provider = get_provider(args.format) if args.format else None
    config = ConfigFile(
        Path(args.definition),
        provider,
        ignore_case=not args.case_sensitive,
    )
    for directory in args.overlay:
        config.add_location(Path(directory))
    return config


def _report_error(args: argparse.Namespace, err: Exception) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()
    return 1


def cmd_get(args: argparse.Namespace) -> int:
    """Handler for 'stratacfg get' command.

    Args:
        args: Parsed command-line arguments containing the definition
            file, key, overlays, target type and flags.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    try:
        config = _open_file(args)
        value = config.get_as(args.key, _TYPES[args.type])
    except StrataCfgError as err:
        return _report_error(args, err)

    print(value)
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    """Handler for 'stratacfg set' command.

    Applies the overlays, then the save directory as the last (writable)
    overlay, changes the key and saves it.

    Args:
        args: Parsed command-line arguments containing the definition
            file, key, value, save directory, overlays and flags.

    Returns:
        Exit code (0 for success, 1 for failure).

    Note:
        Creates the save directory and document if they don't exist.

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    try:
        config = _open_file(args)
        config.add_location(Path(args.save_dir), save=True)
        config.set(args.key, args.value)
        config.save()
    except StrataCfgError as err:
        return _report_error(args, err)

    print(f"{args.key} = {config.get(args.key)}")
    print(f"Saved to: {config.save_location}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handler for 'stratacfg show' command.

    Args:
        args: Parsed command-line arguments containing the definition
            file, overlays and flags.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    try:
        config = _open_file(args)
    except StrataCfgError as err:
        return _report_error(args, err)

    print(f"[{config.root_key}] {config.definition_file}")
    for key, value in config.items():
        print(f"{key} = {value}")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "definition",
        help="Path to the definition document",
    )
    parser.add_argument(
        "--overlay",
        action="append",
        default=[],
        metavar="DIR",
        help="Overlay directory, may be repeated (later overlays win)",
    )
    parser.add_argument(
        "--format",
        choices=available_formats(),
        default=None,
        help="Document format (default: from the file extension)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show which documents are loaded, merged and saved",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stratacfg",
        description="stratacfg - layered application settings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"stratacfg {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'get' command
    parser_get = subparsers.add_parser(
        "get",
        help="Print the effective value of a key",
        description="Load the definition document and overlays and print one value.",
    )
    _add_common_arguments(parser_get)
    parser_get.add_argument(
        "key",
        help="Path key, e.g. MainWindow.Size.Width",
    )
    parser_get.add_argument(
        "--type",
        choices=list(_TYPES),
        default="str",
        help="Convert the value before printing (default: str)",
    )
    parser_get.add_argument(
        "--case-sensitive",
        action="store_true",
        help="Match keys case-sensitively",
    )
    parser_get.set_defaults(func=cmd_get)

    # 'set' command
    parser_set = subparsers.add_parser(
        "set",
        help="Change a key and save it to a writable overlay",
        description="Set a value and save only the changed value to the save directory.",
    )
    _add_common_arguments(parser_set)
    parser_set.add_argument(
        "key",
        help="Path key, e.g. MainWindow.Size.Width",
    )
    parser_set.add_argument(
        "value",
        help="New value",
    )
    parser_set.add_argument(
        "--save-dir",
        required=True,
        help="Directory of the writable overlay document",
    )
    parser_set.add_argument(
        "--case-sensitive",
        action="store_true",
        help="Match keys case-sensitively",
    )
    parser_set.set_defaults(func=cmd_set)

    # 'show' command
    parser_show = subparsers.add_parser(
        "show",
        help="Print every effective key and value",
        description="Load the definition document and overlays and list all values.",
    )
    _add_common_arguments(parser_show)
    parser_show.set_defaults(func=cmd_show, case_sensitive=False)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the stratacfg CLI.

    This function is registered as the 'stratacfg' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
