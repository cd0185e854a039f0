"""Synchronization module for component-sync.

Philosophy: THE LIBRARY IS TRUTH, THE DESTINATION IS A COPY.

This module provides:
- DirectorySyncer: One-way, content-hash based sync of category directories
- RunStatistics: Per-run counters (unchanged, new, updated, skipped)
- FileSyncOutcome: What happened to a single file
- unified_diff: Diff of an installed file against its library version
"""

from component_sync.sync.engine import DirectorySyncer, FileSyncOutcome, RunStatistics
from component_sync.sync.diff import unified_diff

__all__ = [
    "DirectorySyncer",
    "FileSyncOutcome",
    "RunStatistics",
    "unified_diff",
]
