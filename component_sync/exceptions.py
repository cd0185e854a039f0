"""Exceptions raised by component-sync."""

from pathlib import Path
from typing import Optional


class SyncError(Exception):
    """Base class for component-sync errors."""


class ConfigurationError(SyncError):
    """Invalid invocation arguments or settings. Fatal to the invocation."""


class FileSyncError(SyncError):
    """A single file (or a category's destination) could not be synced.

    Attributes:
        path: The path the failing operation was working on
        cause: The underlying OS error, if any
    """

    def __init__(self, message: str, path: Path, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.path = Path(path)
        self.cause = cause

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause is not None:
            return f"{message}: {self.cause}"
        return message
