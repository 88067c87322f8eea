"""Decide how the scan treats each directory it reaches."""

import os
from enum import Enum
from fnmatch import fnmatchcase
from pathlib import Path

from npmcleaner.models import ScanConfig


class Classification(str, Enum):
    PRUNE = "prune"  # Excluded: don't descend, don't report
    CANDIDATE = "candidate"  # Marker folder: evaluate, never descend
    CONTINUE = "continue"  # Ordinary directory: descend


class PathClassifier:
    """
    Classify directories as excluded, marker folders, or ordinary.

    Exclusion patterns are matched against whole components of the path
    relative to the scan root, so the root the user asked for is never
    excluded itself. Exclusion is checked before the marker name: a
    node_modules below a hidden folder is pruned, not reported.
    """

    def __init__(
        self,
        root: Path,
        marker_name: str,
        exclusion_patterns: tuple[str, ...] = (),
    ):
        self.root = Path(root)
        self.marker_name = marker_name
        self.exclusion_patterns = tuple(exclusion_patterns)

    @classmethod
    def from_config(cls, config: ScanConfig) -> "PathClassifier":
        patterns = config.exclusion_patterns if config.exclude_platform_paths else ()
        return cls(config.root_path, config.marker_name, patterns)

    def excluded_component(self, path: Path) -> str | None:
        """Return the first path component matching an exclusion pattern."""
        if not self.exclusion_patterns:
            return None

        try:
            relative = Path(os.path.relpath(path, self.root))
        except ValueError:
            # Different drive on Windows; fall back to the full path
            relative = Path(path)

        for part in relative.parts:
            if part in (os.curdir, os.pardir):
                continue
            for pattern in self.exclusion_patterns:
                if fnmatchcase(part, pattern):
                    return part
        return None

    def is_excluded(self, path: Path) -> bool:
        return self.excluded_component(path) is not None

    def is_marker(self, path: Path) -> bool:
        return Path(path).name == self.marker_name

    def classify(self, path: Path) -> Classification:
        """Classify a path already known to be a directory."""
        if self.is_excluded(path):
            return Classification.PRUNE
        if self.is_marker(path):
            return Classification.CANDIDATE
        return Classification.CONTINUE
