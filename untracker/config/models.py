from pydantic import BaseModel, Field, field_validator
from typing import Literal


class VCSConfig(BaseModel):
    provider: Literal["git"] = "git"
    executable: str = "git"
    timeout: int = Field(default=30, gt=0)
    discover_nested: bool = True
    ignore_dirs: list[str] = Field(default_factory=lambda: [
        ".git", "node_modules", "__pycache__", ".venv", ".tox", "build", "dist"
    ])


def _check_template(template: str, placeholder: str) -> str:
    """Format *template* with a dummy value so bad fields fail at load time."""
    try:
        template.format(**{placeholder: "x"})
    except (KeyError, IndexError, AttributeError, ValueError) as e:
        raise ValueError(
            f"template {template!r} may only use the {{{placeholder}}} placeholder ({e!r})"
        ) from e
    return template


class CommandsConfig(BaseModel):
    repository_template: str = "cd {root}"
    command_template: str = "git rm --cached {path}"
    quote_paths: bool = True

    @field_validator("repository_template")
    @classmethod
    def validate_repository_template(cls, v: str) -> str:
        return _check_template(v, "root")

    @field_validator("command_template")
    @classmethod
    def validate_command_template(cls, v: str) -> str:
        return _check_template(v, "path")


class SelectionConfig(BaseModel):
    checked_by_default: bool = True
    exclude: list[str] = Field(default_factory=list)


class UntrackerConfig(BaseModel):
    vcs: VCSConfig = Field(default_factory=VCSConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
