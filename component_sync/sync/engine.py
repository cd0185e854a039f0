"""Sync engine for component-sync.

Philosophy: THE LIBRARY IS TRUTH, THE DESTINATION IS A COPY.

DirectorySyncer copies category directories one way, from the library to
the destination:
- files missing at the destination are created
- files whose content fingerprint differs are overwritten
- everything else is left alone

Nothing is deleted and nothing is recorded between runs; classification is
recomputed from file contents every time, so re-running is always safe.
"""

import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from component_sync.config import FileStatus, RunConfiguration, SyncPair
from component_sync.exceptions import FileSyncError
from component_sync.reporting import ConsoleReporter
from component_sync.sync.diff import unified_diff
from component_sync.utils.hashing import fast_hash_file, files_match

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


@dataclass
class RunStatistics:
    """Counters for one sync run, across all pairs."""

    unchanged: int = 0
    new: int = 0
    updated: int = 0
    skipped: int = 0

    # Categories whose source directory was missing
    missing_sources: List[str] = field(default_factory=list)

    # Timing
    started_at: float = 0.0
    completed_at: float = 0.0
    duration_ms: float = 0.0

    # Errors
    errors: List[str] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        """Files created or overwritten (or that would be, in a dry run)."""
        return self.new + self.updated

    @property
    def processed(self) -> int:
        return self.unchanged + self.new + self.updated

    @property
    def success(self) -> bool:
        return not self.errors

    def record(self, status: FileStatus) -> None:
        """Increment the counter for a classified file."""
        if status is FileStatus.UNCHANGED:
            self.unchanged += 1
        elif status is FileStatus.NEW:
            self.new += 1
        elif status is FileStatus.UPDATED:
            self.updated += 1
        else:
            self.skipped += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "success": self.success,
            "unchanged": self.unchanged,
            "new": self.new,
            "updated": self.updated,
            "skipped": self.skipped,
            "total_changes": self.total_changes,
            "missing_sources": self.missing_sources,
            "duration_ms": self.duration_ms,
            "errors": self.errors,
        }


@dataclass
class FileSyncOutcome:
    """What happened to one file.

    Attributes:
        relative_name: File name relative to its category directory
        source_path: Library file
        dest_path: Installed file
        status: Classification (SKIPPED when an I/O error aborted the file)
        dry_run: True when nothing was written on purpose
        backup_path: The ``.bak`` copy written before overwriting, if any
        diff: Unified diff lines shown for an updated file, if computed
        error: Error message when status is SKIPPED
    """
    relative_name: str
    source_path: Path
    dest_path: Path
    status: FileStatus
    dry_run: bool = False
    backup_path: Optional[Path] = None
    diff: Optional[List[str]] = None
    error: Optional[str] = None

    @property
    def written(self) -> bool:
        return (
            not self.dry_run
            and self.status in (FileStatus.NEW, FileStatus.UPDATED)
        )


class DirectorySyncer:
    """One-way, content-hash based sync of category directories.

    Attributes:
        config: Run flags (dry run, backups, diffs, ...)
        reporter: Console output for the operator
    """

    def __init__(
        self,
        config: Optional[RunConfiguration] = None,
        reporter: Optional[ConsoleReporter] = None,
    ):
        self.config = config or RunConfiguration()
        self.reporter = reporter or ConsoleReporter(verbose=self.config.verbose)

    def run_sync(
        self,
        pairs: Iterable[SyncPair],
        library_root: Optional[Path] = None,
        destination_root: Optional[Path] = None,
    ) -> RunStatistics:
        """Sync every pair, in order, and return the aggregate statistics.

        A missing source directory or an unusable destination directory
        skips that pair only; the remaining pairs are still synced.

        Args:
            pairs: Category pairs to sync
            library_root: Library tree shown in the banner, if given
            destination_root: Destination tree shown in the banner, if given
        """
        stats = RunStatistics(started_at=time.time())
        self.reporter.banner(
            self.config.dry_run,
            self.config.create_backup,
            library_root=library_root,
            destination_root=destination_root,
        )

        for pair in pairs:
            self.reporter.section(pair.label)
            try:
                self.sync_pair(pair, stats)
            except FileSyncError as e:
                logger.error(f"Skipping {pair.label}: {e}")
                stats.errors.append(f"{pair.label}: {e}")
                self.reporter.pair_error(pair.label, e)

        stats = self._finalize_stats(stats)
        self.reporter.summary(stats, self.config.dry_run)
        return stats

    def sync_pair(self, pair: SyncPair, stats: RunStatistics) -> None:
        """Sync the top-level files of one category directory.

        Raises:
            FileSyncError: If the destination directory can't be created or
                the source directory can't be listed
        """
        if not pair.source_dir.is_dir():
            logger.warning(f"Source directory not found for {pair.label}: {pair.source_dir}")
            stats.missing_sources.append(pair.label)
            self.reporter.missing_source(pair.source_dir)
            return

        if not pair.dest_dir.is_dir():
            if not self.config.dry_run:
                try:
                    pair.dest_dir.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise FileSyncError(
                        "Cannot create destination directory", pair.dest_dir, e
                    ) from e
                logger.info(f"Created directory {pair.dest_dir}")
            self.reporter.directory_created(pair.dest_dir, self.config.dry_run)

        try:
            sources = sorted(
                path for path in pair.source_dir.glob(pair.pattern) if path.is_file()
            )
        except OSError as e:
            raise FileSyncError("Cannot list source directory", pair.source_dir, e) from e

        logger.debug(f"{pair.label}: {len(sources)} file(s) matching {pair.pattern}")
        for source_path in sources:
            self.sync_file(
                source_path,
                pair.dest_dir / source_path.name,
                source_path.name,
                stats,
            )

    def sync_file(
        self,
        source_path: Path,
        dest_path: Path,
        relative_name: str,
        stats: Optional[RunStatistics] = None,
    ) -> FileSyncOutcome:
        """Classify one file and copy it if it is new or changed.

        I/O failures are reported and counted as skipped instead of being
        raised, so the caller can carry on with the next file.

        Args:
            source_path: Library file
            dest_path: Installed file (may not exist yet)
            relative_name: Name shown in the report and diff headers
            stats: Accumulator to update; a fresh one is used if omitted

        Returns:
            FileSyncOutcome describing the classification and any write
        """
        stats = stats if stats is not None else RunStatistics()
        source_path = Path(source_path)
        dest_path = Path(dest_path)
        outcome = FileSyncOutcome(
            relative_name=relative_name,
            source_path=source_path,
            dest_path=dest_path,
            status=FileStatus.SKIPPED,
            dry_run=self.config.dry_run,
        )

        self.reporter.verbose(f"Checking {relative_name}")

        try:
            self._sync_file(outcome)
        except FileSyncError as e:
            logger.error(f"Failed to sync {relative_name}: {e}")
            outcome.status = FileStatus.SKIPPED
            outcome.error = str(e)
            stats.errors.append(f"{relative_name}: {e}")
            stats.record(FileStatus.SKIPPED)
            self.reporter.file_error(relative_name, e)
            return outcome

        stats.record(outcome.status)
        self.reporter.file_status(relative_name, outcome.status, self.config.dry_run)
        return outcome

    def _sync_file(self, outcome: FileSyncOutcome) -> None:
        """Classify and, unless dry-running, write. Fills in ``outcome``."""
        src = outcome.source_path
        dst = outcome.dest_path

        outcome.status = self._classify(src, dst)
        if outcome.status is FileStatus.UNCHANGED:
            logger.debug(f"{outcome.relative_name} unchanged")
            return

        if outcome.status is FileStatus.UPDATED and self.config.show_diff:
            try:
                outcome.diff = unified_diff(
                    dst.read_bytes(), src.read_bytes(), outcome.relative_name
                )
            except OSError as e:
                raise FileSyncError("Cannot read file for diff", dst, e) from e
            self.reporter.diff(outcome.relative_name, outcome.diff)

        if self.config.dry_run:
            logger.debug(f"{outcome.relative_name} would be {outcome.status.value}")
            return

        if self.config.create_backup and dst.exists():
            outcome.backup_path = self._backup(dst)
            self.reporter.verbose(f"Created backup: {outcome.backup_path}")

        try:
            shutil.copy2(src, dst)
        except OSError as e:
            raise FileSyncError("Copy failed", dst, e) from e

        if self.config.verify_integrity:
            self._verify_copy(src, dst)

        logger.info(f"{outcome.relative_name} {outcome.status.value} -> {dst}")

    def _classify(self, src: Path, dst: Path) -> FileStatus:
        """NEW if the destination is absent, else compare fingerprints."""
        if not dst.exists():
            return FileStatus.NEW

        algorithm = self.config.hash_algorithm
        try:
            src_hash = fast_hash_file(src, algorithm)
        except (OSError, ValueError) as e:
            raise FileSyncError("Cannot read source file", src, e) from e
        try:
            dst_hash = fast_hash_file(dst, algorithm)
        except (OSError, ValueError) as e:
            raise FileSyncError("Cannot read destination file", dst, e) from e

        if src_hash == dst_hash:
            return FileStatus.UNCHANGED
        return FileStatus.UPDATED

    def _backup(self, dst: Path) -> Path:
        """Copy ``dst`` to ``dst.bak``; a failure aborts this file."""
        backup_path = dst.with_name(dst.name + BACKUP_SUFFIX)
        try:
            shutil.copy2(dst, backup_path)
        except OSError as e:
            raise FileSyncError("Backup failed", backup_path, e) from e
        logger.debug(f"Created backup {backup_path}")
        return backup_path

    def _verify_copy(self, src: Path, dst: Path) -> None:
        """Check the written file has the source's fingerprint."""
        try:
            matches = files_match(src, dst, self.config.hash_algorithm)
        except (OSError, ValueError) as e:
            raise FileSyncError("Verification failed", dst, e) from e
        if not matches:
            raise FileSyncError("Verification failed: content differs from source", dst)

    def _finalize_stats(self, stats: RunStatistics) -> RunStatistics:
        """Finalize stats with timing info."""
        stats.completed_at = time.time()
        stats.duration_ms = (stats.completed_at - stats.started_at) * 1000

        logger.info(
            f"Sync {'preview' if self.config.dry_run else 'run'}: "
            f"{stats.new} new, "
            f"{stats.updated} updated, "
            f"{stats.unchanged} unchanged, "
            f"{stats.skipped} skipped "
            f"in {stats.duration_ms:.1f}ms"
        )

        return stats
