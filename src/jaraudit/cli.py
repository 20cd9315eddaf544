"""CLI entry point for jaraudit — I/O boundary only."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from jaraudit import ArchiveNotFoundError, JarAuditError, __version__
from jaraudit import commands
from jaraudit.archive import Entry
from jaraudit.config import DEFAULT_CONFIG_FILE, AuditConfig, load_config
from jaraudit.editor import edit_text
from jaraudit.log import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``jaraudit`` command.
    """
    parser = argparse.ArgumentParser(
        prog="jaraudit",
        description="Inspect the audit trail and other entries inside a JAR file",
    )
    parser.add_argument(
        "-j",
        "--jar",
        required=True,
        help="Name of the jar file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug information",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help=f"Configuration file location (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command", required=True, metavar="COMMAND"
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Display contents of the archived file",
    )
    show_parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Name of the audit trail file (default: AUDIT.AUDIT_FILE)",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List all within the archive; filtered by AUDIT.IGNORED_FILES",
    )
    list_parser.add_argument(
        "--format",
        choices=["pretty", "csv"],
        default="pretty",
        dest="output_format",
        help="Listing format (default: pretty)",
    )
    list_parser.add_argument(
        "--exclude-from",
        type=Path,
        default=None,
        dest="exclude_from",
        help="Also exclude entries matching this gitignore-style file",
    )

    edit_parser = subparsers.add_parser(
        "edit",
        help="Edit a file within the archive",
    )
    edit_parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Name of the file from the archive (default: AUDIT.AUDIT_FILE)",
    )

    delete_parser = subparsers.add_parser(
        "delete",
        help="Remove a file from the archive",
    )
    delete_parser.add_argument(
        "file",
        help="Name of the file from the archive",
    )
    return parser


def _require_archive(jar: str) -> None:
    """Fail early when the archive path is missing.

    Raises:
        ArchiveNotFoundError: If *jar* does not exist.
    """
    if not Path(jar).exists():
        raise ArchiveNotFoundError(f"Unable to open JAR file: '{jar}'")


def _format_listing(args: argparse.Namespace, entries: list[Entry]) -> str:
    if args.output_format == "csv":
        from jaraudit.formatter.csv_ import format_csv

        return format_csv(entries)

    from jaraudit.formatter.pretty import format_pretty

    return format_pretty(entries)


def _run_command(
    args: argparse.Namespace,
    config: AuditConfig,
    editor: commands.Editor = edit_text,
) -> str:
    """Dispatch the parsed subcommand.

    Args:
        args: Parsed CLI namespace.
        config: Loaded configuration.
        editor: Editor used by ``edit``.

    Returns:
        str: Text to print on stdout.

    Raises:
        JarAuditError: On any user-facing error.
    """
    if args.command == "show":
        return commands.show(args.jar, args.file, config)
    if args.command == "list":
        entries = commands.list_entries(args.jar, config, args.exclude_from)
        return _format_listing(args, entries)
    if args.command == "edit":
        return commands.edit(args.jar, args.file, config, editor).message
    return commands.delete(args.jar, args.file)


def _load(args: argparse.Namespace) -> AuditConfig:
    _require_archive(args.jar)
    return load_config(args.config)


def run_jaraudit(
    argv: list[str] | None = None,
    editor: commands.Editor = edit_text,
) -> str:
    """Run jaraudit with provided CLI args and return the text to print.

    Logging is left untouched, so this is the primary test target for
    CLI behavior.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.
        editor: Editor used by ``edit``.

    Returns:
        str: Final rendered output.

    Raises:
        JarAuditError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _load(args)
    return _run_command(args, config, editor)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()

    try:
        config = _load(args)
        setup_logging(config.logging_config, verbose=args.verbose)
        output = _run_command(args, config)
    except JarAuditError as exc:
        sys.stderr.write(f"jaraudit: {exc}\n")
        sys.exit(1)

    sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main()
