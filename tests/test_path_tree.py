"""Tests for the selection tree."""

from __future__ import annotations

import itertools
from pathlib import Path

import pytest

from untracker.tree import (
    CheckState,
    PathNode,
    PathOutsideRootError,
    PathTree,
    build_tree,
)
from untracker.vcs.models import Repository


def _shape(tree: PathTree) -> dict[Path, tuple[Path | None, Repository | None]]:
    """Parent and repository per path, ignoring child order."""
    return {
        path: (node.parent.path if node.parent else None, node.repository)
        for path, node in tree.nodes.items()
    }


# ── Construction ─────────────────────────────────────────────────────


def test_root_created_first(project_root: Path):
    tree = PathTree(project_root)
    assert len(tree) == 1
    assert tree.root.path == project_root
    assert tree.root.is_root
    assert tree.root.repository is None


def test_relative_root_rejected():
    with pytest.raises(ValueError):
        PathTree("relative/root")


def test_ensure_node_creates_ancestors(project_root: Path, repo_main: Repository):
    tree = PathTree(project_root)
    leaf = tree.ensure_node(project_root / "a" / "b" / "c.txt", repo_main)

    assert leaf.repository == repo_main
    assert leaf.is_leaf
    b = tree.get(project_root / "a" / "b")
    a = tree.get(project_root / "a")
    assert leaf.parent is b
    assert b.parent is a
    assert a.parent is tree.root
    # Implicit ancestors carry no repository
    assert a.repository is None
    assert b.repository is None
    assert len(tree) == 4


def test_shared_ancestors_not_duplicated(project_root: Path, repo_main: Repository):
    tree = PathTree(project_root)
    tree.ensure_node(project_root / "a" / "x", repo_main)
    tree.ensure_node(project_root / "a" / "y", repo_main)

    a = tree.get(project_root / "a")
    assert [c.name for c in a.children] == ["x", "y"]
    assert len(tree) == 4  # root, a, x, y


def test_ensure_node_idempotent(project_root: Path, repo_main: Repository):
    tree = PathTree(project_root)
    first = tree.ensure_node(project_root / "f.txt", repo_main)
    second = tree.ensure_node(project_root / "f.txt", repo_main)
    assert first is second
    assert len(tree.root.children) == 1


def test_first_repository_wins(project_root: Path, repo_main: Repository, repo_vendor: Repository):
    tree = PathTree(project_root)
    tree.ensure_node(project_root / "f.txt", repo_main)
    node = tree.ensure_node(project_root / "f.txt", repo_vendor)
    assert node.repository == repo_main


def test_implicit_directory_keeps_no_repository(project_root: Path, repo_main: Repository):
    tree = PathTree(project_root)
    tree.ensure_node(project_root / "dir" / "f.txt", repo_main)
    node = tree.ensure_node(project_root / "dir", repo_main)
    assert node.repository is None


def test_relative_paths_resolve_against_root(project_root: Path, repo_main: Repository):
    tree = PathTree(project_root)
    node = tree.ensure_node("sub/f.txt", repo_main)
    assert node.path == project_root / "sub" / "f.txt"
    assert "sub/f.txt" in tree


def test_paths_normalized(project_root: Path, repo_main: Repository):
    tree = PathTree(project_root)
    a = tree.ensure_node(project_root / "x" / ".." / "y" / "f.txt", repo_main)
    b = tree.ensure_node(project_root / "y" / "." / "f.txt", repo_main)
    assert a is b
    assert project_root / "x" not in tree


def test_path_outside_root_rejected(project_root: Path, repo_main: Repository):
    tree = PathTree(project_root)
    with pytest.raises(PathOutsideRootError):
        tree.ensure_node(project_root.parent / "elsewhere.txt", repo_main)
    with pytest.raises(ValueError):
        tree.ensure_node("../escape.txt", repo_main)
    # Nothing leaked into the tree
    assert len(tree) == 1


def test_ensure_root_returns_root(project_root: Path):
    tree = PathTree(project_root)
    assert tree.ensure_node(project_root) is tree.root


# ── Mapping ingestion ────────────────────────────────────────────────


def test_leaf_count_matches_distinct_files(project_root: Path, sample_mapping):
    tree = PathTree.from_mapping(project_root, sample_mapping)
    leaves = list(tree.leaves())
    assert len(leaves) == len(sample_mapping)
    assert {leaf.path for leaf in leaves} == set(sample_mapping)


def test_duplicate_entries_collapse(project_root: Path, repo_main: Repository):
    mapping = {
        str(project_root / "a" / "f.txt"): repo_main,
        project_root / "a" / "f.txt": repo_main,
        "a/./f.txt": repo_main,
    }
    tree = PathTree.from_mapping(project_root, mapping)
    assert len(list(tree.leaves())) == 1


def test_permutations_build_isomorphic_trees(project_root: Path, sample_mapping):
    items = list(sample_mapping.items())
    reference = _shape(PathTree.from_mapping(project_root, dict(items)))
    for perm in itertools.permutations(items):
        tree = PathTree.from_mapping(project_root, dict(perm))
        assert _shape(tree) == reference


def test_child_order_follows_first_seen(project_root: Path, repo_main: Repository):
    mapping = {
        project_root / "z.txt": repo_main,
        project_root / "a.txt": repo_main,
        project_root / "m" / "f.txt": repo_main,
    }
    tree = PathTree.from_mapping(project_root, mapping)
    assert [c.name for c in tree.root.children] == ["z.txt", "a.txt", "m"]


def test_build_tree_wrapper(project_root: Path, sample_mapping):
    tree = build_tree(project_root, sample_mapping)
    assert isinstance(tree, PathTree)
    assert len(list(tree.leaves())) == len(sample_mapping)


def test_empty_mapping_root_is_only_leaf(project_root: Path):
    tree = PathTree.from_mapping(project_root, {})
    assert list(tree.leaves()) == [tree.root]


# ── Traversal ────────────────────────────────────────────────────────


def test_leaves_preorder(project_root: Path, repo_main: Repository):
    mapping = {
        project_root / "b" / "2.txt": repo_main,
        project_root / "a.txt": repo_main,
        project_root / "b" / "1.txt": repo_main,
        project_root / "b" / "c" / "3.txt": repo_main,
    }
    tree = PathTree.from_mapping(project_root, mapping)
    names = [leaf.path.relative_to(project_root).as_posix() for leaf in tree.leaves()]
    assert names == ["b/2.txt", "b/1.txt", "b/c/3.txt", "a.txt"]


def test_iter_nodes_preorder(project_root: Path, repo_main: Repository):
    tree = PathTree.from_mapping(
        project_root,
        {project_root / "d" / "f.txt": repo_main, project_root / "g.txt": repo_main},
    )
    names = [n.name for n in tree.iter_nodes()]
    assert names == [project_root.name, "d", "f.txt", "g.txt"]


# ── Checked state ────────────────────────────────────────────────────


def test_leaves_checked_by_default(project_root: Path, sample_mapping):
    tree = PathTree.from_mapping(project_root, sample_mapping)
    assert all(leaf.checked for leaf in tree.leaves())
    assert tree.root.state is CheckState.CHECKED


def test_unchecked_default(project_root: Path, sample_mapping):
    tree = PathTree.from_mapping(project_root, sample_mapping, checked=False)
    assert not any(leaf.checked for leaf in tree.leaves())
    assert tree.root.state is CheckState.UNCHECKED


def test_directory_state_derived(project_root: Path, sample_mapping):
    tree = PathTree.from_mapping(project_root, sample_mapping)
    tree.set_checked(project_root / "build" / "out.log", False)

    assert tree.get(project_root / "build").state is CheckState.PARTIAL
    assert tree.root.state is CheckState.PARTIAL
    assert tree.get(project_root / "build" / "cache").state is CheckState.CHECKED
    assert tree.get(project_root / "build" / "out.log").state is CheckState.UNCHECKED


def test_set_checked_directory_applies_to_leaves(project_root: Path, sample_mapping):
    tree = PathTree.from_mapping(project_root, sample_mapping)
    tree.set_checked(project_root / "build", False)

    build_leaves = list(tree.get(project_root / "build").iter_leaves())
    assert len(build_leaves) == 2
    assert not any(leaf.checked for leaf in build_leaves)
    assert tree.get(project_root / ".env").checked


def test_toggle(project_root: Path, sample_mapping):
    tree = PathTree.from_mapping(project_root, sample_mapping)
    env = project_root / ".env"

    assert tree.toggle(env).checked is False
    assert tree.toggle(env).checked is True


def test_toggle_partial_directory_checks_all(project_root: Path, sample_mapping):
    tree = PathTree.from_mapping(project_root, sample_mapping)
    tree.set_checked(project_root / "build" / "out.log", False)

    tree.toggle(project_root / "build")
    assert tree.get(project_root / "build").state is CheckState.CHECKED


def test_set_checked_unknown_path(project_root: Path):
    tree = PathTree(project_root)
    with pytest.raises(KeyError):
        tree.set_checked(project_root / "missing", True)


def test_get_outside_root_returns_none(project_root: Path):
    tree = PathTree(project_root)
    assert tree.get("/definitely/elsewhere") is None
    assert 42 not in tree


# ── PathNode ─────────────────────────────────────────────────────────


def test_path_node_identity_semantics(project_root: Path):
    a = PathNode(path=project_root / "x")
    b = PathNode(path=project_root / "x")
    assert a != b
    assert len({a, b}) == 2


def test_path_node_add_child_sets_parent(project_root: Path):
    parent = PathNode(path=project_root)
    child = PathNode(path=project_root / "x")
    parent.add_child(child)
    assert child.parent is parent
    assert not parent.is_leaf
    assert child.is_leaf


def test_build_tree_checked_flag(project_root: Path, sample_mapping):
    tree = build_tree(project_root, sample_mapping, checked=False)
    assert tree.root.state is CheckState.UNCHECKED
