"""VCS providers for Untracker."""

from untracker.config.models import VCSConfig
from untracker.vcs.base import VCSProvider
from untracker.vcs.git import GitProvider
from untracker.vcs.models import Repository, VCSError
from untracker.vcs.scanner import ScanResult, TrackedIgnoredScanner


def create_provider(config: VCSConfig) -> VCSProvider:
    """Create a VCS provider from config."""
    if config.provider != "git":
        raise ValueError(
            f"Unsupported VCS provider: {config.provider!r}. "
            "Currently only 'git' is supported."
        )
    return GitProvider(config)


__all__ = [
    "GitProvider",
    "Repository",
    "ScanResult",
    "TrackedIgnoredScanner",
    "VCSError",
    "VCSProvider",
    "create_provider",
]
