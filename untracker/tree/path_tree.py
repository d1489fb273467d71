"""Deduplicated path tree rooted at a project directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path

from untracker.tree.models import CheckState, PathNode
from untracker.vcs.models import Repository

logger = logging.getLogger(__name__)


class PathOutsideRootError(ValueError):
    """Raised when a path is not the project root or one of its descendants."""

    def __init__(self, path: Path, root: Path) -> None:
        self.path = path
        self.root = root
        super().__init__(f"Path {path} is outside the project root {root}")


class PathTree:
    """Nests file paths under their common ancestor directories.

    Each distinct path maps to exactly one :class:`PathNode`. Ancestors are
    created on demand and shared, so inserting ``a/b/x`` and ``a/b/y`` yields
    a single ``a`` and a single ``a/b`` node. The project root is created
    first and is the only node without a parent.
    """

    def __init__(self, root: str | Path, checked: bool = True) -> None:
        self._checked_default = checked
        self._nodes: dict[Path, PathNode] = {}
        root_path = _normalize(Path(root))
        if not root_path.is_absolute():
            raise ValueError(f"Project root must be absolute, got {root!r}")
        self.root = PathNode(path=root_path, checked=checked)
        self._nodes[root_path] = self.root

    @classmethod
    def from_mapping(
        cls,
        root: str | Path,
        mapping: Mapping[str | Path, Repository],
        checked: bool = True,
    ) -> PathTree:
        """Build a tree for *root* and ingest *mapping* in one go."""
        tree = cls(root, checked=checked)
        tree.build_from_mapping(mapping)
        return tree

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def ensure_node(
        self, path: str | Path, repository: Repository | None = None
    ) -> PathNode:
        """Return the node for *path*, creating it and its ancestors if needed.

        An existing node is returned untouched, so the first repository
        associated with a path wins.
        """
        key = self._key(path)
        node = self._nodes.get(key)
        if node is not None:
            if repository is not None and node.repository != repository:
                logger.debug(
                    "Keeping first association for %s (ignoring %s)",
                    key,
                    repository.canonical_path,
                )
            return node

        node = PathNode(path=key, repository=repository, checked=self._checked_default)
        self._nodes[key] = node
        # key != root here, and _key guarantees it lies under root
        self.ensure_node(key.parent).add_child(node)
        return node

    def build_from_mapping(self, mapping: Mapping[str | Path, Repository]) -> None:
        """Insert every ``path -> repository`` entry of *mapping*."""
        for path, repository in mapping.items():
            self.ensure_node(path, repository)
        logger.debug("Tree for %s holds %d nodes", self.root.path, len(self._nodes))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, path: str | Path) -> PathNode | None:
        try:
            return self._nodes.get(self._key(path))
        except PathOutsideRootError:
            return None

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return self.get(path) is not None

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def nodes(self) -> Mapping[Path, PathNode]:
        return self._nodes

    def iter_nodes(self) -> Iterator[PathNode]:
        """Yield every node in pre-order, children in insertion order."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> Iterator[PathNode]:
        """Yield the leaves in pre-order. A childless root is its own leaf."""
        return self.root.iter_leaves()

    # ------------------------------------------------------------------
    # Checked state
    # ------------------------------------------------------------------

    def set_checked(self, path: str | Path, checked: bool) -> PathNode:
        """Set the flag of a leaf, or of every leaf under a directory."""
        node = self._require(path)
        for leaf in node.iter_leaves():
            leaf.checked = checked
        return node

    def toggle(self, path: str | Path) -> PathNode:
        """Flip a node like a checkbox click: partial or unchecked becomes checked."""
        node = self._require(path)
        return self.set_checked(path, node.state is not CheckState.CHECKED)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require(self, path: str | Path) -> PathNode:
        node = self.get(path)
        if node is None:
            raise KeyError(f"Node not found: {path}")
        return node

    def _key(self, path: str | Path) -> Path:
        p = Path(path)
        if not p.is_absolute():
            p = self.root.path / p
        p = _normalize(p)
        if p != self.root.path and not p.is_relative_to(self.root.path):
            raise PathOutsideRootError(p, self.root.path)
        return p


def _normalize(path: Path) -> Path:
    """Collapse ``.`` and ``..`` lexically, without touching the filesystem."""
    return Path(os.path.normpath(path))
