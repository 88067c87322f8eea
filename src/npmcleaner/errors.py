"""Exceptions raised by npmcleaner."""

from pathlib import Path


class NpmCleanerError(Exception):
    """Base class for all npmcleaner errors."""


class ScanError(NpmCleanerError):
    """A directory or file could not be read while scanning.

    Scans are all-or-nothing: any ScanError aborts the scan and discards
    folders accepted so far.
    """

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class DeletionError(NpmCleanerError):
    """A folder could not be deleted. Remaining deletions are abandoned."""

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"error deleting {self.path}: {reason}")


class ResultSetFinalizedError(NpmCleanerError):
    """A finalized result set was modified."""


class ResultSetFullError(NpmCleanerError):
    """A folder was added to a result set that already holds its limit."""
