"""Untracker - pick tracked-but-ignored files and generate the commands to untrack them."""

from untracker.config import UntrackerConfig, load_config
from untracker.selection import SelectionAggregator
from untracker.session import UntrackSession
from untracker.tree import CheckState, PathNode, PathOutsideRootError, PathTree
from untracker.vcs import GitProvider, Repository, TrackedIgnoredScanner, VCSError, create_provider

__version__ = "0.1.0"

__all__ = [
    "CheckState",
    "GitProvider",
    "PathNode",
    "PathOutsideRootError",
    "PathTree",
    "Repository",
    "SelectionAggregator",
    "TrackedIgnoredScanner",
    "UntrackSession",
    "UntrackerConfig",
    "VCSError",
    "create_provider",
    "load_config",
]
