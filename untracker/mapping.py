"""Load a file -> repository mapping from a YAML or JSON file.

The file maps repository roots to the files to offer for untracking::

    /home/me/project:
      - build/output.log
      - .env
    vendor/lib:
      - dist/bundle.js

Relative repository roots resolve against the project root, relative file
paths against their repository root. JSON is accepted as a YAML subset.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from untracker.vcs.models import Repository

logger = logging.getLogger(__name__)


def load_mapping(path: str | Path, project_root: str | Path) -> dict[Path, Repository]:
    """Read *path* and return ``{absolute file -> repository}``.

    Raises:
        ValueError: If the file cannot be read or has the wrong shape.
    """
    path = Path(path)
    project_root = Path(project_root).resolve()
    try:
        raw = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ValueError(f"Cannot read mapping file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid mapping in {path}: expected repository -> file list")

    mapping: dict[Path, Repository] = {}
    for repo_root, files in raw.items():
        if not isinstance(files, list):
            raise ValueError(
                f"Invalid mapping in {path}: files for {repo_root!r} must be a list"
            )
        root = Path(str(repo_root))
        if not root.is_absolute():
            root = project_root / root
        root = Path(os.path.normpath(root))
        repository = Repository(root=root)
        for entry in files:
            file_path = Path(str(entry))
            if not file_path.is_absolute():
                file_path = root / file_path
            file_path = Path(os.path.normpath(file_path))
            mapping.setdefault(file_path, repository)

    logger.debug("Loaded %d file(s) from %s", len(mapping), path)
    return mapping
