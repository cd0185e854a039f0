"""Shared pytest fixtures for component-sync tests.

Provides temp library/destination trees, sync pairs and a syncer factory
whose console report is captured in memory.
"""

import io
import logging

import pytest

from component_sync.config import RunConfiguration, SyncPair, SyncSettings
from component_sync.reporting import ConsoleReporter
from component_sync.sync.engine import DirectorySyncer


@pytest.fixture
def tmp_dirs(tmp_path):
    """Create a library tree with two categories and an empty destination root."""
    library = tmp_path / "library"
    dest = tmp_path / "dest"
    (library / "agents").mkdir(parents=True)
    (library / "commands").mkdir(parents=True)
    dest.mkdir()
    return {"library": library, "dest": dest, "root": tmp_path}


@pytest.fixture
def populated_library(tmp_dirs):
    """Library with a.md ("X") and b.md ("Y") in agents, one command, and noise."""
    library = tmp_dirs["library"]

    (library / "agents" / "a.md").write_text("X")
    (library / "agents" / "b.md").write_text("Y")
    (library / "commands" / "review.md").write_text("---\nname: review\n---\nReview the diff.\n")

    # Not synced: wrong extension, and nested below the category
    (library / "agents" / "notes.txt").write_text("scratch")
    (library / "agents" / "drafts").mkdir()
    (library / "agents" / "drafts" / "draft.md").write_text("draft")

    return tmp_dirs


@pytest.fixture
def settings(tmp_dirs):
    return SyncSettings(
        library_root=tmp_dirs["library"],
        destination_root=tmp_dirs["dest"],
    )


@pytest.fixture
def agents_pair(tmp_dirs):
    return SyncPair(
        source_dir=tmp_dirs["library"] / "agents",
        dest_dir=tmp_dirs["dest"] / "agents",
        label="agents",
    )


@pytest.fixture
def make_syncer():
    """Factory for DirectorySyncers that report into a StringIO.

    The report text is available as ``syncer.reporter.stream.getvalue()``.
    """
    def _make(**flags) -> DirectorySyncer:
        config = RunConfiguration(**flags)
        reporter = ConsoleReporter(
            stream=io.StringIO(), verbose=config.verbose, color=False
        )
        return DirectorySyncer(config, reporter)

    return _make


@pytest.fixture
def restore_logging():
    """Drop the handlers a CLI run installs on the root logger and restore its level."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def snapshot():
    """Return a function mapping every file under a directory to its bytes."""
    def _snapshot(directory):
        return {
            str(path.relative_to(directory)): path.read_bytes()
            for path in sorted(directory.rglob("*"))
            if path.is_file()
        }

    return _snapshot
