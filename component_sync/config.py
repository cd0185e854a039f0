"""Configuration dataclasses for component-sync."""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from component_sync.exceptions import ConfigurationError
from component_sync.utils.hashing import ALGORITHMS


DEFAULT_CATEGORIES: Tuple[str, ...] = ("agents", "commands")
DEFAULT_PATTERN = "*.md"
DEFAULT_DEST_ROOT = Path("~/.claude")

ENV_LIBRARY_ROOT = "COMPONENT_SYNC_LIBRARY_ROOT"
ENV_DEST_ROOT = "COMPONENT_SYNC_DEST_ROOT"
ENV_CATEGORIES = "COMPONENT_SYNC_CATEGORIES"


class FileStatus(Enum):
    """Classification of a single file during a sync run."""
    UNCHANGED = "unchanged"
    NEW = "new"
    UPDATED = "updated"
    SKIPPED = "skipped"     # Failed with an I/O error, nothing written


@dataclass(frozen=True)
class RunConfiguration:
    """Flags resolved once per invocation.

    Attributes:
        dry_run: Classify and report only, never touch the filesystem
        create_backup: Copy an existing destination file to ``<file>.bak``
            before overwriting it
        verbose: Emit per-file diagnostic lines
        show_diff: Print a unified diff for updated files
        verify_integrity: Re-fingerprint each written file against its source
        hash_algorithm: Fingerprint algorithm passed to ``fast_hash_file``
    """
    dry_run: bool = False
    create_backup: bool = False
    verbose: bool = False
    show_diff: bool = True
    verify_integrity: bool = True
    hash_algorithm: str = "auto"

    def __post_init__(self):
        if self.hash_algorithm not in ALGORITHMS:
            raise ConfigurationError(f"Unknown hash algorithm: {self.hash_algorithm}")


@dataclass(frozen=True)
class SyncPair:
    """One category: a source directory copied into a destination directory.

    Only files matching ``pattern`` directly inside ``source_dir`` take
    part; subdirectories are not recursed into.
    """
    source_dir: Path
    dest_dir: Path
    label: str
    pattern: str = DEFAULT_PATTERN

    def __post_init__(self):
        """Ensure paths are Path objects."""
        # frozen dataclass: bypass __setattr__ for coercion
        object.__setattr__(self, "source_dir", Path(self.source_dir))
        object.__setattr__(self, "dest_dir", Path(self.dest_dir))


@dataclass
class SyncSettings:
    """Where the component library lives and where it is installed.

    Attributes:
        library_root: Directory holding one subdirectory per category
        destination_root: User-level configuration directory
        categories: Category names, each a subdirectory of both roots
    """
    library_root: Path = field(default_factory=Path.cwd)
    destination_root: Path = DEFAULT_DEST_ROOT
    categories: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))

    def __post_init__(self):
        """Ensure paths are Path objects and category names are plain names."""
        self.library_root = Path(self.library_root).expanduser()
        self.destination_root = Path(self.destination_root).expanduser()

        if not self.categories:
            raise ConfigurationError("At least one category is required")
        for name in self.categories:
            if not name or name in (".", "..") or "/" in name or "\\" in name:
                raise ConfigurationError(f"Invalid category name: {name!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SyncSettings":
        """Build settings from environment variables, falling back to defaults.

        Reads ``COMPONENT_SYNC_LIBRARY_ROOT``, ``COMPONENT_SYNC_DEST_ROOT``
        and ``COMPONENT_SYNC_CATEGORIES`` (comma-separated).

        Raises:
            ConfigurationError: If the category list is empty or malformed
        """
        environ = os.environ if environ is None else environ
        kwargs: Dict[str, object] = {}

        if environ.get(ENV_LIBRARY_ROOT):
            kwargs["library_root"] = Path(environ[ENV_LIBRARY_ROOT])
        if environ.get(ENV_DEST_ROOT):
            kwargs["destination_root"] = Path(environ[ENV_DEST_ROOT])
        if ENV_CATEGORIES in environ:
            kwargs["categories"] = [
                name.strip() for name in environ[ENV_CATEGORIES].split(",") if name.strip()
            ]

        return cls(**kwargs)

    def pairs(self) -> List[SyncPair]:
        """Return one SyncPair per category, in category order."""
        return [
            SyncPair(
                source_dir=self.library_root / name,
                dest_dir=self.destination_root / name,
                label=name,
            )
            for name in self.categories
        ]
