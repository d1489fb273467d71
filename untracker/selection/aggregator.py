"""Groups checked leaves by repository and renders the untrack script."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from untracker.config.models import CommandsConfig
from untracker.tree.path_tree import PathTree
from untracker.vcs.models import Repository

logger = logging.getLogger(__name__)

# repository -> checked files, both in first-seen traversal order
CommandGroups = dict[Repository, list[Path]]


class SelectionAggregator:
    """Turns the checked state of a tree into per-repository command text.

    Both operations recompute from the tree on every call and keep no state
    between calls, so they can run after each checkbox change.
    """

    def __init__(self, commands: CommandsConfig | None = None) -> None:
        self.commands = commands or CommandsConfig()

    def collect_checked(self, tree: PathTree) -> CommandGroups:
        """Return checked leaf paths grouped by their repository.

        Leaves are visited depth-first in child insertion order. Unchecked
        leaves and leaves without a repository are skipped.
        """
        groups: CommandGroups = {}
        for leaf in tree.leaves():
            if not leaf.checked:
                continue
            if leaf.repository is None:
                continue
            groups.setdefault(leaf.repository, []).append(leaf.path)
        return groups

    def render_commands(self, groups: CommandGroups) -> str:
        """Render one header per repository, one line per file, then a blank line."""
        lines: list[str] = []
        for repository, files in groups.items():
            lines.append(
                self.commands.repository_template.format(
                    root=self._quote(repository.canonical_path)
                )
            )
            for path in files:
                lines.append(
                    self.commands.command_template.format(
                        path=self._quote(relative_path(repository, path))
                    )
                )
            lines.append("")
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def _quote(self, value: str) -> str:
        return shlex.quote(value) if self.commands.quote_paths else value


def relative_path(repository: Repository, path: Path) -> str:
    """Path of *path* relative to the repository root, with ``/`` separators.

    Falls back to the absolute path when the file is not under the root.
    """
    try:
        return path.relative_to(repository.root).as_posix()
    except ValueError:
        logger.debug("%s is not under %s", path, repository.root)
        return path.as_posix()


def collect_checked(tree: PathTree) -> CommandGroups:
    """Convenience wrapper around SelectionAggregator.collect_checked()."""
    return SelectionAggregator().collect_checked(tree)


def render_commands(groups: CommandGroups, commands: CommandsConfig | None = None) -> str:
    """Convenience wrapper around SelectionAggregator.render_commands()."""
    return SelectionAggregator(commands).render_commands(groups)
