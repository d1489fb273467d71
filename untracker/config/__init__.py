from .loader import load_config
from .models import (
    CommandsConfig,
    SelectionConfig,
    UntrackerConfig,
    VCSConfig,
)

__all__ = [
    "CommandsConfig",
    "SelectionConfig",
    "UntrackerConfig",
    "VCSConfig",
    "load_config",
]
