"""Shared fixtures for npmcleaner tests."""

import os
import shutil
import time
from pathlib import Path

import pytest

MB = 1024 * 1024
DAY = 24 * 60 * 60


def make_file(path: Path, size: int = 0, mtime: float | None = None) -> Path:
    """Create a sparse file of the given size, optionally backdated."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def now():
    return time.time()


@pytest.fixture
def make_project(now):
    """
    Build a project folder holding a node_modules folder.

    The project's newest file is modified `days_ago` days (plus an hour)
    before `now`. node_modules holds `size_mb` MB of freshly modified files,
    which must not affect the project's age.
    """

    def _make(parent: Path, name: str, size_mb: int = 60, days_ago: int = 10) -> Path:
        project = parent / name
        make_file(project / "package.json", 2, mtime=now - days_ago * DAY - 3600)
        node_modules = project / "node_modules"
        make_file(node_modules / "react" / "index.js", size_mb * MB)
        return node_modules

    return _make


DEEP_LEVELS = 1100


@pytest.fixture
def deep_chain(tmp_path):
    """
    A chain of DEEP_LEVELS nested directories, deeper than Python's
    recursion limit. Yields (top, deepest).

    Torn down bottom-up here since recursive removal can't handle it.
    """
    top = tmp_path / "deep"
    chain = [top]
    os.mkdir(top)
    for _ in range(DEEP_LEVELS - 1):
        chain.append(chain[-1] / "d")
        os.mkdir(chain[-1])

    yield top, chain[-1]

    for directory in reversed(chain):
        for child in directory.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
        os.rmdir(directory)
