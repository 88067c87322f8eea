"""Find large, stale marker folders under a root directory.

The scan is a single depth-first walk. Excluded directories are pruned,
marker folders are measured and never entered, and the walk stops as soon
as the result limit is reached.
"""

import logging
import time
from pathlib import Path

from npmcleaner.classifier import Classification, PathClassifier
from npmcleaner.metrics import folder_size_mb, project_age_days
from npmcleaner.models import (
    Folder,
    ResultSet,
    ScanConfig,
    ScanOutcome,
    TraceAction,
    TraceEntry,
)
from npmcleaner.traversal import WalkAction, walk_tree

logger = logging.getLogger(__name__)


class TreeWalker:
    """Runs one scan for a ScanConfig."""

    def __init__(self, config: ScanConfig, now: float | None = None):
        self.config = config
        self.classifier = PathClassifier.from_config(config)
        self.now = now
        self.results = ResultSet(limit=config.max_results)
        self.trace: list[TraceEntry] = []

    def _record(self, action: TraceAction, path: Path, reason: str) -> None:
        logger.debug("%s %s: %s", action.value, path, reason)
        if self.config.debug:
            self.trace.append(TraceEntry(action=action, path=str(path), reason=reason))

    def evaluate(self, path: Path) -> Folder | None:
        """
        Measure a marker folder and decide whether to report it.

        Age is checked first; size is only computed for folders that are old
        enough.

        Returns:
            The accepted Folder, or None if it is too fresh or too small
        """
        config = self.config
        age = project_age_days(path, config.marker_name, now=self.now)
        if age < config.min_age_days:
            self._record(
                TraceAction.SKIP, path, f"Age is less than {config.min_age_days} days ({age})"
            )
            return None

        size = folder_size_mb(path)
        if size < config.min_size_mb:
            self._record(
                TraceAction.SKIP, path, f"Size is less than {config.min_size_mb}MB ({size}MB)"
            )
            return None

        return Folder(path=str(path), size_mb=size, mod_days_ago=age)

    def visit(self, path: Path, is_dir: bool) -> WalkAction:
        if not is_dir:
            return WalkAction.CONTINUE

        kind = self.classifier.classify(path)
        if kind is Classification.PRUNE:
            component = self.classifier.excluded_component(path)
            self._record(TraceAction.PRUNE, path, f"Excluded folder '{component}'")
            return WalkAction.SKIP_SUBTREE

        if kind is Classification.CONTINUE:
            return WalkAction.CONTINUE

        folder = self.evaluate(path)
        if folder is not None:
            self.results.add(folder)
            self._record(
                TraceAction.ACCEPT,
                path,
                f"{folder.size_mb}MB, modified {folder.mod_days_ago} days ago",
            )
            if self.results.is_full:
                self._record(
                    TraceAction.STOP, path, f"Reached limit of {self.config.max_results} folders"
                )
                return WalkAction.STOP

        # Never descend into a marker folder
        return WalkAction.SKIP_SUBTREE

    def run(self) -> ScanOutcome:
        """
        Walk the tree and return the sorted results.

        Raises:
            ScanError: If anything under the root cannot be read. No partial
                results are returned.
        """
        started = time.monotonic()
        completed = walk_tree(self.config.root_path, self.visit)
        self.results.stopped_early = not completed
        self.results.finalize()

        logger.debug(
            "Scanned %s in %.2fs: %d folders, %dMB%s",
            self.config.root_path,
            time.monotonic() - started,
            len(self.results.folders),
            self.results.total_size_mb,
            " (stopped early)" if self.results.stopped_early else "",
        )
        return ScanOutcome(results=self.results, trace=self.trace)


def run_scan(config: ScanConfig, now: float | None = None) -> ScanOutcome:
    """
    Scan config.root_path for marker folders.

    Args:
        config: Scan settings
        now: Reference time for ages (default: current time)

    Returns:
        ScanOutcome with folders sorted largest first

    Raises:
        ScanError: If the root does not exist or anything cannot be read
    """
    return TreeWalker(config, now=now).run()
