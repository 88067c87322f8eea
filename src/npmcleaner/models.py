"""Data models for npmcleaner."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from npmcleaner.config import (
    DEFAULT_DAYS_AGO,
    DEFAULT_EXCLUSION_PATTERNS,
    DEFAULT_LIMIT,
    DEFAULT_MB_THRESHOLD,
    MARKER_NAME,
)
from npmcleaner.errors import ResultSetFinalizedError, ResultSetFullError


class ScanConfig(BaseModel):
    """Settings for a single scan. Built once and never changed."""

    model_config = ConfigDict(frozen=True)

    root_path: Path = Field(..., description="Directory to start scanning from")
    min_age_days: int = Field(
        DEFAULT_DAYS_AGO, ge=0, description="Only report projects untouched for this many days"
    )
    min_size_mb: int = Field(
        DEFAULT_MB_THRESHOLD, ge=0, description="Only report folders at least this large (MB)"
    )
    max_results: int = Field(
        DEFAULT_LIMIT, ge=1, description="Stop scanning once this many folders are found"
    )
    delete_enabled: bool = Field(False, description="Delete found folders after scanning")
    exclude_platform_paths: bool = Field(
        False, description="Skip hidden and OS-owned folders"
    )
    marker_name: str = Field(MARKER_NAME, min_length=1, description="Folder name to look for")
    exclusion_patterns: tuple[str, ...] = Field(
        DEFAULT_EXCLUSION_PATTERNS,
        description="fnmatch patterns for path components to skip",
    )
    debug: bool = Field(False, description="Record and print every scan decision")


class Folder(BaseModel):
    """A marker folder that passed both the age and size thresholds."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path of the folder")
    size_mb: int = Field(..., description="Total size in MB (1024*1024 bytes, truncated)")
    mod_days_ago: int = Field(..., description="Days since the project was last modified")


class ResultSet(BaseModel):
    """
    Accepted folders for one scan plus their running total size.

    Folders are kept in discovery order until finalize() sorts them. After
    that the result set is read-only: add() and attribute assignment raise
    ResultSetFinalizedError, and folders is a tuple.
    """

    folders: tuple[Folder, ...] = Field(default=())
    total_size_mb: int = Field(0, description="Sum of folder sizes in MB")
    limit: int = Field(DEFAULT_LIMIT, ge=1, description="Maximum number of folders")
    stopped_early: bool = Field(
        False, description="Whether the scan ended because the limit was reached"
    )

    _finalized: bool = PrivateAttr(default=False)

    def __setattr__(self, name: str, value) -> None:
        if not name.startswith("_") and getattr(self, "_finalized", False):
            raise ResultSetFinalizedError(f"cannot set {name} on a finalized result set")
        super().__setattr__(name, value)

    @property
    def is_full(self) -> bool:
        """Whether the result set holds its limit of folders."""
        return len(self.folders) >= self.limit

    @property
    def finalized(self) -> bool:
        return self._finalized

    def add(self, folder: Folder) -> None:
        """Append a folder and update the running total."""
        if self._finalized:
            raise ResultSetFinalizedError("cannot add to a finalized result set")
        if self.is_full:
            raise ResultSetFullError(f"result set already holds {self.limit} folders")
        self.folders = (*self.folders, folder)
        self.total_size_mb += folder.size_mb

    def finalize(self) -> None:
        """Sort folders by size, largest first. Ties keep discovery order."""
        if self._finalized:
            raise ResultSetFinalizedError("result set is already finalized")
        self.folders = tuple(sorted(self.folders, key=lambda f: f.size_mb, reverse=True))
        self._finalized = True


class TraceAction(str, Enum):
    """Kind of decision recorded while scanning."""

    PRUNE = "PRUNE"  # Excluded path, subtree not visited
    SKIP = "SKIP"  # Marker folder below a threshold
    ACCEPT = "ACCEPT"  # Marker folder added to results
    STOP = "STOP"  # Limit reached, walk ended


class TraceEntry(BaseModel):
    """One scan decision, shown with --debug."""

    model_config = ConfigDict(frozen=True)

    action: TraceAction
    path: str
    reason: str


class ScanOutcome(BaseModel):
    """Everything a scan produces."""

    results: ResultSet
    trace: list[TraceEntry] = Field(default_factory=list)
