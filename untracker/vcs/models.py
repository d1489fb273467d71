"""Pydantic models for the VCS subsystem."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class VCSError(Exception):
    """Wraps failures of an external VCS command with context."""

    def __init__(self, provider: str, operation: str, cause: Exception | str) -> None:
        self.provider = provider
        self.operation = operation
        super().__init__(f"{provider} {operation} failed: {cause}")
        if isinstance(cause, BaseException):
            self.__cause__ = cause


class Repository(BaseModel):
    """A version-control working copy that owns some tracked files.

    Frozen so it can key the per-repository command groups.
    """

    model_config = ConfigDict(frozen=True)

    root: Path = Field(description="Absolute path of the working copy root")
    vcs: Literal["git"] = "git"

    @property
    def name(self) -> str:
        return self.root.name or str(self.root)

    @property
    def canonical_path(self) -> str:
        return self.root.as_posix()
