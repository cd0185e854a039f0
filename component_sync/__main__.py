"""CLI entry point for component-sync.

Usage:
    python -m component_sync [--dry-run] [--backup] [--verbose] [--no-diff]
                             [--log-file PATH] [--log-json]

Syncs each category directory of the component library (default: the
current directory) into the destination root (default: ~/.claude).
The mapping is configured through environment variables, see --help.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from component_sync import __version__
from component_sync.config import (
    ENV_CATEGORIES,
    ENV_DEST_ROOT,
    ENV_LIBRARY_ROOT,
    RunConfiguration,
    SyncSettings,
)
from component_sync.exceptions import ConfigurationError
from component_sync.reporting import ConsoleReporter
from component_sync.sync.engine import DirectorySyncer
from component_sync.utils.logging import configure_root_logger

logger = logging.getLogger(__name__)

EPILOG = f"""\
Directories synced (defaults):
  <library>/agents/   -> ~/.claude/agents/
  <library>/commands/ -> ~/.claude/commands/

Only *.md files directly inside each category directory are synced.

Environment:
  {ENV_LIBRARY_ROOT}  library checkout (default: current directory)
  {ENV_DEST_ROOT}     destination root (default: ~/.claude)
  {ENV_CATEGORIES}    comma-separated categories (default: agents,commands)

Examples:
  # Preview changes without syncing
  component-sync --dry-run

  # Sync with backups
  component-sync --backup

  # Quiet sync without diffs
  component-sync --no-diff
"""


class SyncArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ConfigurationError instead of exiting with 2."""

    def error(self, message: str):
        raise ConfigurationError(message)


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    json_output: bool = False,
) -> None:
    """Configure diagnostic logging for CLI runs.

    Console output stays quiet (warnings only) unless --verbose is given;
    a log file records INFO and above.
    """
    if verbose:
        level = logging.DEBUG
    elif log_file:
        level = logging.INFO
    else:
        level = logging.WARNING
    configure_root_logger(level=level, json_output=json_output, log_file=log_file)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = SyncArgumentParser(
        prog="component-sync",
        allow_abbrev=False,
        description=(
            "Sync the component library to your local configuration. "
            "Only new or changed files are copied."
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Preview changes without actually syncing"
    )
    parser.add_argument(
        "--backup", action="store_true",
        help="Create .bak files before overwriting"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Show detailed operations"
    )
    parser.add_argument(
        "--no-diff", action="store_true",
        help="Skip showing diffs (faster sync)"
    )
    parser.add_argument(
        "--log-file", type=Path,
        help="Also write diagnostic logs to this file"
    )
    parser.add_argument(
        "--log-json", action="store_true",
        help="Format diagnostic logs as JSON lines"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for invalid arguments or settings or an
            unusable log file)
    """
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        settings = SyncSettings.from_env()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    try:
        setup_logging(verbose=args.verbose, log_file=args.log_file, json_output=args.log_json)
    except OSError as e:
        print(f"Error: cannot open log file {args.log_file}: {e}", file=sys.stderr)
        return 1

    logger.debug(f"Library root: {settings.library_root}")
    logger.debug(f"Destination root: {settings.destination_root}")

    config = RunConfiguration(
        dry_run=args.dry_run,
        create_backup=args.backup,
        verbose=args.verbose,
        show_diff=not args.no_diff,
    )
    syncer = DirectorySyncer(config, ConsoleReporter(verbose=args.verbose))
    syncer.run_sync(
        settings.pairs(),
        library_root=settings.library_root,
        destination_root=settings.destination_root,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
