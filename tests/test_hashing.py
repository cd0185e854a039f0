"""Tests for component_sync.utils.hashing module.

Fingerprints decide whether a file is unchanged or updated -- if hashing
breaks, every classification breaks.
"""

import hashlib

import pytest

from component_sync.utils.hashing import BUFFER_SIZE, fast_hash_file, files_match


class TestFastHashFile:
    """Test file hashing with different algorithms."""

    def test_hash_text_file(self, tmp_path):
        """Basic text file should produce consistent hash."""
        f = tmp_path / "agent.md"
        f.write_text("---\nname: reviewer\n---\n")
        h1 = fast_hash_file(f)
        h2 = fast_hash_file(f)
        assert h1 == h2
        assert isinstance(h1, str)
        assert len(h1) == 16  # xxh64 produces 16 hex chars

    def test_different_content_different_hash(self, tmp_path):
        f1 = tmp_path / "a.md"
        f2 = tmp_path / "b.md"
        f1.write_text("X")
        f2.write_text("X2")
        assert fast_hash_file(f1) != fast_hash_file(f2)

    def test_same_content_same_hash(self, tmp_path):
        """Same content in different files must produce same hash."""
        f1 = tmp_path / "a.md"
        f2 = tmp_path / "b.md"
        f1.write_text("identical")
        f2.write_text("identical")
        assert fast_hash_file(f1) == fast_hash_file(f2)

    def test_empty_file(self, tmp_path):
        """Empty file should still produce a valid hash."""
        f = tmp_path / "empty.md"
        f.write_bytes(b"")
        assert len(fast_hash_file(f)) > 0

    def test_multi_chunk_file(self, tmp_path):
        """Files larger than the read buffer hash the whole content."""
        f1 = tmp_path / "big1.md"
        f2 = tmp_path / "big2.md"
        data = b"a" * (BUFFER_SIZE * 3 + 7)
        f1.write_bytes(data)
        f2.write_bytes(data[:-1] + b"b")
        assert fast_hash_file(f1) != fast_hash_file(f2)

    def test_md5_matches_hashlib(self, tmp_path):
        f = tmp_path / "test.md"
        f.write_bytes(b"md5 test")
        assert fast_hash_file(f, algorithm="md5") == hashlib.md5(b"md5 test").hexdigest()

    def test_sha256_algorithm(self, tmp_path):
        f = tmp_path / "test.md"
        f.write_text("sha256 test")
        h = fast_hash_file(f, algorithm="sha256")
        assert len(h) == 64  # SHA256 produces 64 hex chars

    def test_xxhash_is_auto(self, tmp_path):
        f = tmp_path / "test.md"
        f.write_text("auto")
        assert fast_hash_file(f, algorithm="xxhash") == fast_hash_file(f)

    def test_nonexistent_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            fast_hash_file(tmp_path / "nonexistent.md")

    def test_directory_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Not a file"):
            fast_hash_file(tmp_path)

    def test_unknown_algorithm_raises(self, tmp_path):
        f = tmp_path / "test.md"
        f.write_text("test")
        with pytest.raises(ValueError, match="Unknown algorithm"):
            fast_hash_file(f, algorithm="bogus")


class TestFilesMatch:
    """Test the equality check built on fingerprints."""

    def test_identical_files(self, tmp_path):
        (tmp_path / "a.md").write_bytes(b"\x00\x01same")
        (tmp_path / "b.md").write_bytes(b"\x00\x01same")
        assert files_match(tmp_path / "a.md", tmp_path / "b.md")

    def test_single_byte_difference(self, tmp_path):
        (tmp_path / "a.md").write_bytes(b"a")
        (tmp_path / "b.md").write_bytes(b"b")
        assert not files_match(tmp_path / "a.md", tmp_path / "b.md")

    def test_with_md5(self, tmp_path):
        (tmp_path / "a.md").write_text("x")
        (tmp_path / "b.md").write_text("x")
        assert files_match(tmp_path / "a.md", tmp_path / "b.md", algorithm="md5")
