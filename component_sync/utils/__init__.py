"""Utility modules for component-sync.

This package provides:
- hashing: Content fingerprints used for change detection
- logging: Configured logging with JSON/text output support
"""

from component_sync.utils.hashing import fast_hash_file, files_match
from component_sync.utils.logging import configure_root_logger, get_logger

__all__ = [
    "fast_hash_file",
    "files_match",
    "configure_root_logger",
    "get_logger",
]
