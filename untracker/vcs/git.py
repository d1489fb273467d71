"""Git provider: shells out to the git executable."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from untracker.config.models import VCSConfig
from untracker.vcs.base import VCSProvider
from untracker.vcs.models import Repository, VCSError

logger = logging.getLogger(__name__)


class GitProvider(VCSProvider):
    """Finds git working copies and their tracked-but-ignored files."""

    def __init__(self, config: VCSConfig | None = None) -> None:
        self.config = config or VCSConfig()

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def find_repositories(self, project_root: Path) -> list[Repository]:
        project_root = Path(project_root).resolve()
        roots: list[Path] = []

        enclosing = self.toplevel(project_root)
        if enclosing is not None:
            roots.append(enclosing)

        if self.config.discover_nested:
            for nested in self._walk_nested(project_root):
                if nested not in roots:
                    roots.append(nested)

        logger.info("Found %d git repositories under %s", len(roots), project_root)
        return [Repository(root=r) for r in roots]

    def toplevel(self, path: Path) -> Path | None:
        """Return the working copy root containing *path*, or None."""
        try:
            stdout = self._run(["rev-parse", "--show-toplevel"], cwd=path, operation="rev-parse")
        except VCSError as e:
            if e.__cause__ is not None:
                raise  # git missing or hung, not a "no repository" answer
            logger.debug("%s is not inside a git repository: %s", path, e)
            return None
        top = stdout.strip()
        return Path(top).resolve() if top else None

    def _walk_nested(self, project_root: Path) -> list[Path]:
        """Directories below *project_root* holding a ``.git`` entry."""
        ignore = set(self.config.ignore_dirs)
        found: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(project_root):
            current = Path(dirpath)
            # .git is a dir for plain clones and a file for submodules/worktrees
            if current != project_root and (".git" in dirnames or ".git" in filenames):
                found.append(current.resolve())
            dirnames[:] = sorted(d for d in dirnames if d not in ignore)
        return found

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_tracked_ignored(self, repository: Repository) -> list[Path]:
        stdout = self._run(
            ["ls-files", "-z", "--cached", "--ignored", "--exclude-standard"],
            cwd=repository.root,
            operation="ls-files",
        )
        files = [repository.root / rel for rel in stdout.split("\0") if rel]
        logger.debug(
            "%s: %d tracked file(s) match ignore rules",
            repository.canonical_path,
            len(files),
        )
        return files

    # ------------------------------------------------------------------
    # Process
    # ------------------------------------------------------------------

    def _run(self, args: list[str], cwd: Path, operation: str) -> str:
        cmd = [self.config.executable, *args]
        try:
            # bytes in, fsdecode out: file names need not be valid UTF-8
            result = subprocess.run(
                cmd,
                cwd=str(cwd),
                capture_output=True,
                timeout=self.config.timeout,
            )
        except FileNotFoundError as e:
            raise VCSError("git", operation, e) from e
        except subprocess.TimeoutExpired as e:
            raise VCSError("git", operation, e) from e

        if result.returncode != 0:
            stderr = os.fsdecode(result.stderr or b"").strip()
            raise VCSError("git", operation, f"exit {result.returncode}: {stderr[:200]}")
        return os.fsdecode(result.stdout or b"")
