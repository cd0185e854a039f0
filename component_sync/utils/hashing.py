"""Content fingerprints for change detection.

Uses xxhash by default; md5 and sha256 can be selected when a fingerprint
has to match output from other tools (``md5sum`` and friends).
Fingerprints only detect changes, they are not a security control.
"""

import hashlib
from pathlib import Path

import xxhash

# Buffer size for file reading (64KB is good for most filesystems)
BUFFER_SIZE = 65536

ALGORITHMS = ("auto", "xxhash", "md5", "sha256")


def _new_hasher(algorithm: str):
    if algorithm in ("auto", "xxhash"):
        return xxhash.xxh64()
    elif algorithm == "md5":
        return hashlib.md5()
    elif algorithm == "sha256":
        return hashlib.sha256()
    raise ValueError(f"Unknown algorithm: {algorithm}")


def fast_hash_file(file_path: Path, algorithm: str = "auto") -> str:
    """Compute the content fingerprint of a file.

    Args:
        file_path: Path to the file to hash
        algorithm: Hash algorithm ("auto", "xxhash", "md5", "sha256")
                   "auto" is xxh64

    Returns:
        Hex digest of the file contents

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the path is not a regular file or the algorithm is unknown
        PermissionError: If file can't be read
    """
    file_path = Path(file_path)
    hasher = _new_hasher(algorithm)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if not file_path.is_file():
        raise ValueError(f"Not a file: {file_path}")

    with open(file_path, "rb") as f:
        while True:
            data = f.read(BUFFER_SIZE)
            if not data:
                break
            hasher.update(data)

    return hasher.hexdigest()


def files_match(first: Path, second: Path, algorithm: str = "auto") -> bool:
    """Return True when both files have the same content fingerprint."""
    return fast_hash_file(first, algorithm) == fast_hash_file(second, algorithm)
