"""Operator-facing console output.

Everything the operator reads while a sync runs goes through
ConsoleReporter: one classification line per file, diffs, warnings and the
final summary. Diagnostic logging is separate (see ``utils.logging``).
"""

import os
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from component_sync.config import FileStatus

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
CYAN = "\033[0;36m"
BOLD = "\033[1m"
RESET = "\033[0m"

HEAVY_RULE = "═" * 30
LIGHT_RULE = "━" * 28

SYMBOLS = {
    FileStatus.UNCHANGED: "✓",
    FileStatus.NEW: "+",
    FileStatus.UPDATED: "↻",
    FileStatus.SKIPPED: "✗",
}

ACTION_TEXT = {
    FileStatus.NEW: "new file",
    FileStatus.UPDATED: "updated",
}


def _supports_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class ConsoleReporter:
    """Writes the sync report to a text stream.

    Attributes:
        stream: Destination stream (stdout by default)
        verbose: Whether ``verbose()`` lines are printed
        color: Whether ANSI colors are used; auto-detected from the stream
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        verbose: bool = False,
        color: Optional[bool] = None,
    ):
        self.stream = stream if stream is not None else sys.stdout
        self.verbose_enabled = verbose
        self.color = _supports_color(self.stream) if color is None else color

    def _paint(self, text: str, *codes: str) -> str:
        if not self.color or not codes:
            return text
        return "".join(codes) + text + RESET

    def _write(self, line: str = "") -> None:
        self.stream.write(line + "\n")
        self.stream.flush()

    def banner(
        self,
        dry_run: bool,
        create_backup: bool,
        library_root: Optional[Path] = None,
        destination_root: Optional[Path] = None,
    ) -> None:
        """Print the run header, naming the trees being synced when known."""
        self._write(self._paint("Component Sync", BOLD, CYAN))
        self._write(self._paint(HEAVY_RULE, CYAN))
        if library_root is not None:
            self._write(f"📚 Library:     {library_root}")
        if destination_root is not None:
            self._write(f"📂 Destination: {destination_root}")
        if dry_run:
            self._write(self._paint("🔍 Running in DRY-RUN mode (no files will be modified)", YELLOW))
        if create_backup:
            self._write(self._paint("💾 Backup mode enabled", BLUE))

    def section(self, label: str) -> None:
        self._write()
        self._write(self._paint(f"Syncing {label}", BOLD))
        self._write(self._paint(LIGHT_RULE, BLUE))

    def verbose(self, message: str) -> None:
        if self.verbose_enabled:
            self._write(f"{self._paint('[VERBOSE]', CYAN)} {message}")

    def missing_source(self, source_dir: Path) -> None:
        self._write(f"  {self._paint('⚠', YELLOW)} Source directory not found: {source_dir}")

    def directory_created(self, dest_dir: Path, dry_run: bool) -> None:
        if dry_run:
            self._write(f"  {self._paint('📁', YELLOW)} Would create directory: {dest_dir}")
        else:
            self._write(f"  {self._paint('📁', GREEN)} Created directory: {dest_dir}")

    def file_status(self, name: str, status: FileStatus, dry_run: bool) -> None:
        """Print the one classification line for a processed file."""
        symbol = SYMBOLS[status]
        if status is FileStatus.UNCHANGED:
            self._write(f"  {self._paint(symbol, GREEN)} {name} {self._paint('(unchanged)', CYAN)}")
            return

        text = ACTION_TEXT[status]
        if dry_run:
            self._write(f"  {self._paint(symbol, YELLOW)} {name} {self._paint(f'(would be {text})', CYAN)}")
        else:
            self._write(f"  {self._paint(symbol, GREEN)} {name} {self._paint(f'({text})', CYAN)}")

    def file_error(self, name: str, error: BaseException) -> None:
        symbol = SYMBOLS[FileStatus.SKIPPED]
        self._write(f"  {self._paint(symbol, RED)} {name} {self._paint(f'(skipped: {error})', RED)}")

    def pair_error(self, label: str, error: BaseException) -> None:
        self._write(f"  {self._paint(SYMBOLS[FileStatus.SKIPPED], RED)} {label}: {error}")

    def diff(self, name: str, lines: Iterable[str]) -> None:
        self._write(self._paint(f"━━━ Diff for {name} ━━━", YELLOW))
        for line in lines:
            line = line.rstrip("\n")
            if line.startswith("+") and not line.startswith("+++"):
                line = self._paint(line, GREEN)
            elif line.startswith("-") and not line.startswith("---"):
                line = self._paint(line, RED)
            elif line.startswith("@@"):
                line = self._paint(line, CYAN)
            self._write(line)
        self._write(self._paint(LIGHT_RULE, YELLOW))
        self._write()

    def summary(self, stats, dry_run: bool) -> None:
        """Print the closing summary for a RunStatistics."""
        self._write()
        self._write(self._paint("Summary", BOLD, CYAN))
        self._write(self._paint(HEAVY_RULE, CYAN))
        self._write(f"  {self._paint('✓', GREEN)} Unchanged: {stats.unchanged} files")
        self._write(f"  {self._paint('+', GREEN)} New:       {stats.new} files")
        self._write(f"  {self._paint('↻', YELLOW)} Updated:   {stats.updated} files")
        self._write(f"  {self._paint('✗', RED)} Skipped:   {stats.skipped} files")

        self._write()
        total = stats.total_changes
        if dry_run:
            self._write(self._paint("No changes were applied (dry run)", YELLOW))
            if total > 0:
                self._write(self._paint(f"Run without --dry-run to apply {total} change(s)", YELLOW))
            else:
                self._write(self._paint("Everything is already up to date!", GREEN))
        elif total > 0:
            self._write(self._paint(f"✓ Successfully synced {total} file(s)", GREEN))
        else:
            self._write(self._paint("✓ Everything is already up to date!", GREEN))

        if stats.skipped:
            self._write(self._paint(f"⚠ {stats.skipped} file(s) could not be synced, see errors above", RED))
