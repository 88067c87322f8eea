"""Age and size measurements for marker folders.

Each measurement is its own walk: age walks the project that contains the
marker folder, size walks the marker folder itself.
"""

import logging
import os
import time
from pathlib import Path

from npmcleaner.errors import ScanError
from npmcleaner.traversal import WalkAction, walk_tree

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
BYTES_PER_MB = 1024 * 1024


def days_since(timestamp: float, now: float | None = None) -> int:
    """Whole days between a timestamp and now, using integer seconds."""
    if now is None:
        now = time.time()
    return (int(now) - int(timestamp)) // SECONDS_PER_DAY


def bytes_to_mb(size_bytes: int) -> int:
    """Convert bytes to MB, truncating."""
    return size_bytes // BYTES_PER_MB


def _lstat(path: Path) -> os.stat_result:
    try:
        return os.lstat(path)
    except OSError as e:
        raise ScanError(path, e.strerror or str(e)) from e


def latest_modification(directory: Path, marker_name: str) -> float | None:
    """
    Find the newest file modification time under a directory.

    Marker folders below the directory are opaque: they are not entered and
    their contents don't count.

    Args:
        directory: Directory to search
        marker_name: Name of folders to treat as opaque

    Returns:
        Newest st_mtime of any file, or None if there are no files
    """
    directory = Path(directory)
    latest: float | None = None

    def visit(path: Path, is_dir: bool) -> WalkAction:
        nonlocal latest
        if is_dir:
            if path.name == marker_name and path != directory:
                return WalkAction.SKIP_SUBTREE
            return WalkAction.CONTINUE

        mtime = _lstat(path).st_mtime
        if latest is None or mtime > latest:
            latest = mtime
        return WalkAction.CONTINUE

    walk_tree(directory, visit)
    return latest


def project_age_days(candidate: Path, marker_name: str, now: float | None = None) -> int:
    """
    Days since the project holding a marker folder was last modified.

    The project is the marker folder's parent. A project with no files
    outside marker folders is measured from the Unix epoch, so it always
    counts as old.
    """
    project = Path(candidate).parent
    latest = latest_modification(project, marker_name)
    if latest is None:
        logger.debug("No files found under %s, treating as never modified", project)
        latest = 0.0
    return days_since(latest, now)


def folder_size_bytes(path: Path) -> int:
    """Total size of every file under a folder. Directories add nothing."""
    total = 0

    def visit(entry_path: Path, is_dir: bool) -> WalkAction:
        nonlocal total
        if not is_dir:
            total += _lstat(entry_path).st_size
        return WalkAction.CONTINUE

    walk_tree(Path(path), visit)
    return total


def folder_size_mb(path: Path) -> int:
    """Total size of a folder in whole MB."""
    return bytes_to_mb(folder_size_bytes(path))
