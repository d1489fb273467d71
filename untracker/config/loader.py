"""Resolve and load ``untracker.yaml``.

Lookup order is the ``--config`` path, then ``./untracker.yaml``, then
``~/.untracker/config.yaml``. The first non-empty file wins; with none, the
defaults apply. ``${VAR}`` references in string values are replaced from the
environment (unset variables become empty).
"""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import UntrackerConfig

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def _candidate_paths(cli_path: str | None) -> list[Path]:
    paths = [Path("untracker.yaml"), Path.home() / ".untracker" / "config.yaml"]
    if cli_path:
        explicit = Path(cli_path)
        if not explicit.is_file():
            raise ValueError(f"Config file not found: {cli_path}")
        paths.insert(0, explicit)
    return paths


def _read_config_file(path: Path) -> UntrackerConfig | None:
    """Parse one file; None when it is empty."""
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping")

    try:
        return UntrackerConfig.model_validate(_expand_env_vars(raw))
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e


def load_config(cli_path: str | None = None) -> UntrackerConfig:
    """Return the first config found on the lookup path, or the defaults."""
    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        config = _read_config_file(path)
        if config is not None:
            return config
    return UntrackerConfig()


def _expand_env_vars(obj: object) -> object:
    """Replace ``${VAR}`` in every string nested in dicts and lists."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    return obj


# Default YAML template for `untracker config init`
DEFAULT_CONFIG_TEMPLATE = """\
# untracker.yaml

# Version control
vcs:
  provider: "git"
  executable: "git"
  timeout: 30                  # seconds per git invocation
  discover_nested: true        # also scan nested repositories under the project
  # ignore_dirs: [.git, node_modules, __pycache__, .venv, .tox, build, dist]

# Generated script
commands:
  repository_template: "cd {root}"
  command_template: "git rm --cached {path}"
  quote_paths: true

# Initial selection
selection:
  checked_by_default: true
  # exclude: ["*.lock", "vendor/*"]

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
