"""Defaults and platform detection for npmcleaner."""

import os
import sys
from pathlib import Path

# Dependency-cache folder name we look for
MARKER_NAME = "node_modules"

DEFAULT_LIMIT = 10
DEFAULT_MB_THRESHOLD = 50
DEFAULT_DAYS_AGO = 7

# Path components that are never scanned when platform exclusion is on.
# Matched with fnmatch against whole components, so "AppData" does not
# match "MyAppData".
DEFAULT_EXCLUSION_PATTERNS = (
    ".?*",  # Hidden folders (.git, .cache, ...)
    "AppData",  # Windows user profile data
    "Program Files",  # Windows installed programs
)


def on_windows() -> bool:
    """Whether we are running on Windows."""
    return sys.platform.startswith("win")


def default_start_dir() -> Path:
    """
    Directory to scan when --from is not given.

    The user's home directory, or the current directory when no home
    directory can be determined.
    """
    home = os.environ.get("USERPROFILE" if on_windows() else "HOME")
    if home:
        return Path(home)
    try:
        return Path.home()
    except RuntimeError:
        return Path(".")


def default_exclude_platform_paths() -> bool:
    """Platform exclusion is on by default only on Windows."""
    return on_windows()
