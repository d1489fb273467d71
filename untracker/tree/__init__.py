"""Selection tree: deduplicated file/directory nodes under a project root."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from untracker.tree.models import CheckState, PathNode
from untracker.tree.path_tree import PathOutsideRootError, PathTree
from untracker.vcs.models import Repository


def build_tree(
    root: str | Path,
    mapping: Mapping[str | Path, Repository],
    checked: bool = True,
) -> PathTree:
    """Convenience wrapper around PathTree.from_mapping()."""
    return PathTree.from_mapping(root, mapping, checked=checked)


__all__ = [
    "CheckState",
    "PathNode",
    "PathOutsideRootError",
    "PathTree",
    "build_tree",
]
