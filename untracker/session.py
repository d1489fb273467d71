"""Untrack session: one tree, its checked state, and on-demand queries."""

from __future__ import annotations

import fnmatch
import logging
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path

from untracker.config.models import UntrackerConfig
from untracker.selection import CommandGroups, SelectionAggregator, relative_path
from untracker.tree import PathNode, PathTree
from untracker.vcs.models import Repository

logger = logging.getLogger(__name__)


class UntrackSession:
    """Owns the selection tree for one project and answers preview queries.

    Every mutation and query runs under one lock, so a session can be shared
    between threads. The tree and aggregator underneath are not thread-safe
    on their own.
    """

    def __init__(
        self,
        project_root: str | Path,
        files: Mapping[str | Path, Repository],
        config: UntrackerConfig | None = None,
    ) -> None:
        self.config = config or UntrackerConfig()
        self._lock = threading.RLock()
        self.tree = PathTree.from_mapping(
            Path(project_root),
            files,
            checked=self.config.selection.checked_by_default,
        )
        self.aggregator = SelectionAggregator(self.config.commands)
        if self.config.selection.exclude:
            self.exclude(self.config.selection.exclude)

    @property
    def project_root(self) -> Path:
        return self.tree.root.path

    # ------------------------------------------------------------------
    # Checked state
    # ------------------------------------------------------------------

    def set_checked(self, path: str | Path, checked: bool) -> PathNode:
        with self._lock:
            return self.tree.set_checked(path, checked)

    def toggle(self, path: str | Path) -> PathNode:
        with self._lock:
            return self.tree.toggle(path)

    def exclude(self, patterns: Iterable[str]) -> int:
        """Uncheck files whose repository-relative path matches any pattern.

        Returns the number of files unchecked.
        """
        patterns = list(patterns)
        count = 0
        with self._lock:
            for leaf in self._files():
                if leaf.checked and _matches_any(leaf, patterns):
                    leaf.checked = False
                    count += 1
        logger.debug("Excluded %d file(s) matching %s", count, patterns)
        return count

    def only(self, patterns: Iterable[str]) -> int:
        """Keep checked only the files matching any pattern.

        Returns the number of files left checked.
        """
        patterns = list(patterns)
        count = 0
        with self._lock:
            for leaf in self._files():
                leaf.checked = leaf.checked and _matches_any(leaf, patterns)
                count += leaf.checked
        return count

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def selection(self) -> CommandGroups:
        with self._lock:
            return self.aggregator.collect_checked(self.tree)

    def commands_text(self) -> str:
        with self._lock:
            return self.aggregator.render_commands(
                self.aggregator.collect_checked(self.tree)
            )

    def file_count(self) -> int:
        with self._lock:
            return sum(1 for _ in self._files())

    def _files(self) -> Iterable[PathNode]:
        return (leaf for leaf in self.tree.leaves() if leaf.repository is not None)


def _matches_any(leaf: PathNode, patterns: list[str]) -> bool:
    if leaf.repository is None:
        return False
    rel = relative_path(leaf.repository, leaf.path)
    return any(
        fnmatch.fnmatch(rel, pattern) or fnmatch.fnmatch(leaf.path.name, pattern)
        for pattern in patterns
    )
