"""aliasgate CLI entry point: argument parsing and command dispatch.

Builds the argparse parser tree and dispatches each subcommand to its
handler.  All configurable strings (program name, description, formats,
exit codes) come from the central config module.

Usage::

    aliasgate check src/module.py [more.py ...] [--format json]
    aliasgate check-directives Example.usings.yaml [--config .aliasgate.yaml]
    aliasgate describe
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

from aliasgate import __version__
from aliasgate.engine import ScanResult, scan_directives, scan_source
from aliasgate.exceptions import AliasgateError
from aliasgate.lib import config
from aliasgate.lib.rules import load_descriptor


def _run_files(
    args: argparse.Namespace,
    scan: Callable[..., ScanResult],
) -> int:
    """Scan every file argument and fold the results into one exit code."""
    exit_ok = config.get_int("exit_codes.ok")
    exit_rejected = config.get_int("exit_codes.rejected")
    exit_error = config.get_int("exit_codes.error")
    status_rejected = config.get_str("statuses.rejected")
    not_found = config.get_str("messages.file_not_found")
    unreadable = config.get_str("messages.file_unreadable")

    code = exit_ok
    for name in args.files:
        path = Path(name)
        if not path.is_file():
            sys.stderr.write(not_found.format(path=name) + "\n")
            code = exit_error
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            sys.stderr.write(unreadable.format(path=name, error=exc) + "\n")
            code = exit_error
            continue
        try:
            result = scan(
                text,
                name,
                config_path=args.config,
                output_format=args.format,
            )
        except AliasgateError as exc:
            sys.stderr.write(f"  {exc}\n")
            code = exit_error
            continue
        if result.status == status_rejected and code == exit_ok:
            code = exit_rejected
    return code


def cmd_check(args: argparse.Namespace) -> int:
    """Check Python source files."""
    return _run_files(args, scan_source)


def cmd_check_directives(args: argparse.Namespace) -> int:
    """Check YAML directive documents."""
    return _run_files(args, scan_directives)


def cmd_describe(args: argparse.Namespace) -> int:
    """Print the rule descriptor."""
    descriptor = load_descriptor()
    rows = [
        ("id", descriptor.rule_id),
        ("title", descriptor.title),
        ("category", descriptor.category),
        ("severity", descriptor.severity),
        ("enabled by default", "yes" if descriptor.enabled_by_default else "no"),
        ("message", descriptor.message_format),
        ("description", descriptor.description),
        ("help", descriptor.help_link),
    ]
    width = max(len(label) for label, _ in rows)
    for label, value in rows:
        sys.stdout.write(f"{label.ljust(width)}  {value}\n")
    return config.get_int("exit_codes.ok")


def main() -> None:
    """Parse arguments and dispatch to the matching command handler.

    Print help text when no subcommand is given.
    """
    prog = config.get_str("cli.prog_name")
    desc = config.get_str("cli.description")
    formats = [config.get_str("formats.stderr"), config.get_str("formats.json")]
    default_format = config.get_str("formats.default")

    parser = argparse.ArgumentParser(prog=prog, description=desc)
    parser.add_argument(
        "--version", action="version", version=f"{prog} {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text, files_help in (
        ("check", "Check Python source files", "Python files to check"),
        (
            "check-directives",
            "Check YAML directive documents",
            "Directive documents to check",
        ),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("files", nargs="+", help=files_help)
        sub.add_argument("--config", help="Path to the project config file")
        sub.add_argument(
            "--format",
            choices=formats,
            default=default_format,
            help=f"Output format (default: {default_format})",
        )

    subparsers.add_parser("describe", help="Show the rule metadata")

    args = parser.parse_args()

    dispatch = {
        "check": cmd_check,
        "check-directives": cmd_check_directives,
        "describe": cmd_describe,
    }

    handler = dispatch.get(args.command)
    if handler:
        sys.exit(handler(args))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
