"""Builds the file -> repository mapping for a project from a VCS provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from untracker.vcs.base import VCSProvider
from untracker.vcs.models import Repository, VCSError

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Tracked-but-ignored files found under a project root."""

    project_root: Path
    files: dict[Path, Repository] = field(default_factory=dict)
    repositories: list[Repository] = field(default_factory=list)
    errors: dict[Repository, str] = field(default_factory=dict)

    @property
    def has_files(self) -> bool:
        return bool(self.files)


class TrackedIgnoredScanner:
    """Asks a provider for every repository's tracked-but-ignored files."""

    def __init__(self, provider: VCSProvider) -> None:
        self.provider = provider

    def scan(self, project_root: str | Path) -> ScanResult:
        """Collect ``{file -> repository}`` for files under *project_root*.

        A path listed by several repositories keeps the first one. Files
        outside *project_root* are dropped. A repository whose listing fails
        is recorded in ``errors`` and skipped.
        """
        project_root = Path(project_root).resolve()
        result = ScanResult(project_root=project_root)
        result.repositories = self.provider.find_repositories(project_root)

        for repository in result.repositories:
            try:
                paths = self.provider.list_tracked_ignored(repository)
            except VCSError as e:
                logger.warning("Skipping %s: %s", repository.canonical_path, e)
                result.errors[repository] = str(e)
                continue

            for path in paths:
                if not path.is_relative_to(project_root):
                    logger.debug("Skipping %s: outside %s", path, project_root)
                    continue
                result.files.setdefault(path, repository)

        logger.info(
            "Found %d tracked ignored file(s) in %d repositories",
            len(result.files),
            len(result.repositories),
        )
        return result
