"""Shared test fixtures for Untracker."""

from pathlib import Path

import pytest
from unittest.mock import MagicMock

from untracker.config.models import UntrackerConfig
from untracker.vcs.base import VCSProvider
from untracker.vcs.models import Repository


@pytest.fixture
def project_root(tmp_path):
    return tmp_path / "project"


@pytest.fixture
def repo_main(project_root):
    return Repository(root=project_root)


@pytest.fixture
def repo_vendor(project_root):
    return Repository(root=project_root / "vendor" / "lib")


@pytest.fixture
def sample_mapping(project_root, repo_main, repo_vendor):
    """Tracked-but-ignored files across two repositories."""
    return {
        project_root / "build" / "out.log": repo_main,
        project_root / "build" / "cache" / "a.bin": repo_main,
        project_root / ".env": repo_main,
        project_root / "vendor" / "lib" / "dist" / "bundle.js": repo_vendor,
    }


@pytest.fixture
def mock_vcs_provider(repo_main, repo_vendor, sample_mapping):
    provider = MagicMock(spec=VCSProvider)
    provider.find_repositories.return_value = [repo_main, repo_vendor]

    def _list(repository: Repository) -> list[Path]:
        return [p for p, r in sample_mapping.items() if r == repository]

    provider.list_tracked_ignored.side_effect = _list
    return provider


@pytest.fixture
def sample_config():
    return UntrackerConfig()
