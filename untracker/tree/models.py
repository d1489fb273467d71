"""Data models for the selection tree."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from untracker.vcs.models import Repository


class CheckState(str, Enum):
    """Checkbox state of a node as shown in a tree view."""

    CHECKED = "checked"
    UNCHECKED = "unchecked"
    PARTIAL = "partial"


@dataclass(eq=False)
class PathNode:
    """A file or directory in the selection tree.

    Nodes compare by identity; the owning tree guarantees one node per path.
    Only leaves carry a repository and a meaningful ``checked`` flag,
    directory nodes exist for grouping.
    """

    path: Path
    repository: Repository | None = None
    checked: bool = True
    parent: PathNode | None = field(default=None, repr=False)
    children: list[PathNode] = field(default_factory=list, repr=False)

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def add_child(self, child: PathNode) -> None:
        child.parent = self
        self.children.append(child)

    def iter_leaves(self) -> Iterator[PathNode]:
        """Yield the leaves under this node, depth-first in insertion order."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
            else:
                stack.extend(reversed(node.children))

    @property
    def state(self) -> CheckState:
        """Leaf: its own flag. Directory: derived from its leaves."""
        if self.is_leaf:
            return CheckState.CHECKED if self.checked else CheckState.UNCHECKED

        seen_checked = seen_unchecked = False
        for leaf in self.iter_leaves():
            if leaf.checked:
                seen_checked = True
            else:
                seen_unchecked = True
            if seen_checked and seen_unchecked:
                return CheckState.PARTIAL
        return CheckState.CHECKED if seen_checked else CheckState.UNCHECKED
