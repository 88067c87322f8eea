"""Depth-first directory walking.

Every walk in npmcleaner (the main scan and both folder metrics) goes
through walk_tree(). The visitor decides, per entry, whether to descend,
skip the entry's subtree, or stop the whole walk.
"""

import os
import stat
from enum import Enum
from pathlib import Path
from typing import Callable

from npmcleaner.errors import ScanError


class WalkAction(str, Enum):
    """What the walk should do after visiting an entry."""

    CONTINUE = "continue"  # Descend into the entry (if it is a directory)
    SKIP_SUBTREE = "skip_subtree"  # Don't descend into the entry
    STOP = "stop"  # End the whole walk


Visitor = Callable[[Path, bool], WalkAction]


def walk_tree(root: Path, visit: Visitor) -> bool:
    """
    Walk a directory tree depth-first, visiting the root first.

    The visitor is called as visit(path, is_dir) for every entry, in name
    order within each directory. Symlinks below the root are reported as
    non-directories and never followed.

    Args:
        root: Directory (or file) to start from
        visit: Callback returning a WalkAction for each entry

    Returns:
        True if the whole tree was walked, False if the visitor stopped it

    Raises:
        ScanError: If the root or any directory or entry cannot be read.
            Errors raised by the visitor propagate unchanged.
    """
    root = Path(root)
    try:
        root_stat = os.stat(root)
    except OSError as e:
        raise ScanError(root, e.strerror or str(e)) from e

    is_dir = stat.S_ISDIR(root_stat.st_mode)
    action = visit(root, is_dir)
    if action is WalkAction.STOP:
        return False
    if is_dir and action is WalkAction.CONTINUE:
        return _walk_children(root, visit)
    return True


def _sorted_entries(directory: Path) -> list[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise ScanError(directory, e.strerror or str(e)) from e


def _walk_children(directory: Path, visit: Visitor) -> bool:
    # One iterator per open directory level; no recursion, so depth is
    # limited only by the filesystem.
    stack = [iter(_sorted_entries(directory))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        path = Path(entry.path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            raise ScanError(path, e.strerror or str(e)) from e

        action = visit(path, is_dir)
        if action is WalkAction.STOP:
            return False
        if is_dir and action is WalkAction.CONTINUE:
            stack.append(iter(_sorted_entries(path)))

    return True
