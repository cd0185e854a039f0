"""component-sync - install a Markdown component library into a user config dir.

Copies category directories ("agents", "commands", ...) of Markdown
component files from a library checkout into a user-level configuration
directory (``~/.claude`` by default). Files are compared by content
fingerprint, so only new or changed files are written.

Key Features:
    - Hash-based change detection (xxhash by default, md5/sha256 selectable)
    - Dry-run preview that never touches the filesystem
    - Optional ``.bak`` backups before overwriting
    - Unified diffs for updated files
    - Per-file error isolation: one bad file never aborts the run

Quick Start:
    from component_sync import SyncSettings, create_syncer

    syncer = create_syncer(dry_run=True)
    stats = syncer.run_sync(SyncSettings.from_env().pairs())
    print(stats.to_dict())

Classes:
    DirectorySyncer: Runs a sync over a list of SyncPairs
    RunConfiguration: Flags for one run (dry run, backups, diffs, ...)
    SyncSettings: Library root, destination root and categories
    SyncPair: One category's source and destination directories
    RunStatistics: Counters returned by a run
    FileStatus: Enum for per-file classification
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .config import (
    FileStatus,
    RunConfiguration,
    SyncPair,
    SyncSettings,
)
from .exceptions import ConfigurationError, FileSyncError, SyncError
from .reporting import ConsoleReporter
from .sync.engine import DirectorySyncer, FileSyncOutcome, RunStatistics

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Main classes
    "DirectorySyncer",
    "RunConfiguration",
    "SyncSettings",
    "SyncPair",
    "RunStatistics",
    "FileSyncOutcome",
    "ConsoleReporter",
    # Enums
    "FileStatus",
    # Errors
    "SyncError",
    "ConfigurationError",
    "FileSyncError",
    # Helpers
    "create_syncer",
]


def create_syncer(
    dry_run: bool = False,
    create_backup: bool = False,
    verbose: bool = False,
    show_diff: bool = True,
) -> DirectorySyncer:
    """Convenience function to create a DirectorySyncer reporting to stdout.

    Args:
        dry_run: Preview only, write nothing
        create_backup: Write ``.bak`` copies before overwriting
        verbose: Print per-file diagnostic lines
        show_diff: Print unified diffs for updated files

    Returns:
        Configured DirectorySyncer instance

    Example:
        syncer = create_syncer(dry_run=True)
    """
    config = RunConfiguration(
        dry_run=dry_run,
        create_backup=create_backup,
        verbose=verbose,
        show_diff=show_diff,
    )
    return DirectorySyncer(config, ConsoleReporter(verbose=verbose))
