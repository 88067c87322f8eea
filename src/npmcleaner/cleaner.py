"""Deletion of found folders."""

import logging
import shutil
from pathlib import Path
from typing import Callable, Sequence

from npmcleaner.config import MARKER_NAME
from npmcleaner.errors import DeletionError
from npmcleaner.models import Folder

logger = logging.getLogger(__name__)


def is_path_safe(path: Path, marker_name: str = MARKER_NAME) -> bool:
    """
    Check if a path is safe to delete.

    Only marker folders may be deleted; the home directory and filesystem
    roots never are.
    """
    path = Path(path)
    if path.name != marker_name:
        return False
    resolved = path.resolve()
    if resolved == Path(resolved.anchor):
        return False
    try:
        home = Path.home().resolve()
    except RuntimeError:
        # No home directory to protect
        return True
    return resolved != home


def delete_folder(path: Path, marker_name: str = MARKER_NAME) -> None:
    """
    Recursively delete a marker folder.

    Raises:
        DeletionError: If the path is not a marker folder or removal fails
    """
    path = Path(path)
    if not is_path_safe(path, marker_name):
        raise DeletionError(path, f"refusing to delete a folder not named {marker_name}")

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise DeletionError(path, e.strerror or str(e)) from e

    logger.debug("Deleted %s", path)


def delete_folders(
    folders: Sequence[Folder],
    marker_name: str = MARKER_NAME,
    on_start: Callable[[Folder], None] | None = None,
    on_done: Callable[[Folder], None] | None = None,
) -> int:
    """
    Delete folders one at a time, in the given order.

    Stops at the first failure. Folders already deleted stay deleted.

    Args:
        folders: Folders to delete
        marker_name: Name every deleted folder must have
        on_start: Optional callback before each deletion
        on_done: Optional callback after each successful deletion

    Returns:
        Total MB freed

    Raises:
        DeletionError: On the first folder that cannot be deleted
    """
    freed_mb = 0
    for folder in folders:
        if on_start:
            on_start(folder)
        delete_folder(Path(folder.path), marker_name)
        freed_mb += folder.size_mb
        if on_done:
            on_done(folder)
    return freed_mb
