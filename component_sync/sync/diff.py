"""Unified diffs between an installed file and its library version."""

import difflib
from typing import List


def decode_for_diff(data: bytes) -> List[str]:
    """Split file bytes into lines for diffing; undecodable bytes are replaced."""
    return data.decode("utf-8", errors="replace").splitlines(keepends=True)


def unified_diff(old: bytes, new: bytes, name: str, context: int = 3) -> List[str]:
    """Return a unified diff from ``old`` (installed) to ``new`` (library).

    Args:
        old: Destination content before the write
        new: Source content
        name: Relative file name used in the ``---``/``+++`` headers
        context: Lines of context around each hunk

    Returns:
        Diff lines, each ending in a newline. Empty when the texts are equal.
    """
    lines = []
    for line in difflib.unified_diff(
        decode_for_diff(old),
        decode_for_diff(new),
        fromfile=f"a/{name}",
        tofile=f"b/{name}",
        n=context,
    ):
        if not line.endswith("\n"):
            line += "\n\\ No newline at end of file\n"
        lines.append(line)
    return lines
