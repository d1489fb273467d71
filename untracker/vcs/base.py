"""Abstract VCS interface for Untracker."""

from abc import ABC, abstractmethod
from pathlib import Path

from untracker.vcs.models import Repository


class VCSProvider(ABC):
    """Abstract base class for VCS providers.

    Defines the interface for locating working copies and listing files
    that are tracked even though an ignore rule matches them.
    """

    @abstractmethod
    def find_repositories(self, project_root: Path) -> list[Repository]:
        """Find the working copies that own files under *project_root*.

        Includes the repository enclosing *project_root* (if any) and,
        depending on configuration, repositories nested below it.
        """
        ...

    @abstractmethod
    def list_tracked_ignored(self, repository: Repository) -> list[Path]:
        """List absolute paths of tracked files that match ignore rules.

        Raises:
            VCSError: If the underlying tool fails.
        """
        ...
