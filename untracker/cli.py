"""CLI entry point for Untracker."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from untracker.config import UntrackerConfig, load_config
from untracker.config.loader import DEFAULT_CONFIG_TEMPLATE
from untracker.log import configure_logging
from untracker.mapping import load_mapping
from untracker.session import UntrackSession
from untracker.tree import CheckState, PathNode
from untracker.vcs import TrackedIgnoredScanner, VCSError, create_provider

app = typer.Typer(
    name="untracker",
    help="Stop tracking files that match your ignore rules.",
)

config_app = typer.Typer(help="Manage Untracker configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: UntrackerConfig | None = None

_MARKERS = {
    CheckState.CHECKED: "[green]\\[x][/green]",
    CheckState.UNCHECKED: "[dim]\\[ ][/dim]",
    CheckState.PARTIAL: "[yellow]\\[-][/yellow]",
}

ProjectArg = Annotated[str, typer.Argument(help="Project root to scan")]
MappingOpt = Annotated[
    str | None,
    typer.Option("--mapping", "-m", help="YAML/JSON file of repository -> files (skips git)"),
]
ExcludeOpt = Annotated[
    list[str] | None,
    typer.Option("--exclude", "-x", help="Uncheck files matching this glob (repeatable)"),
]


def _get_config() -> UntrackerConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to untracker.yaml")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging("debug" if verbose else _config.log_level, _config.log_format)


def _build_session(
    project: str, mapping: str | None, exclude: list[str] | None
) -> UntrackSession:
    """Collect the input files (git or mapping file) and open a session.

    Raises ValueError or VCSError; callers turn them into exit code 1.
    """
    cfg = _get_config()
    root = Path(project).resolve()
    if not root.is_dir():
        raise ValueError(f"Not a directory: {project}")

    if mapping:
        files = load_mapping(mapping, root)
    else:
        scanner = TrackedIgnoredScanner(create_provider(cfg.vcs))
        result = scanner.scan(root)
        for repository, message in result.errors.items():
            rprint(f"[yellow]Skipped[/yellow] {escape(repository.canonical_path)}: {escape(message)}")
        if not result.repositories:
            rprint(f"[yellow]No repositories found under {escape(str(root))}.[/yellow]")
        files = result.files

    session = UntrackSession(root, files, cfg)
    if exclude:
        session.exclude(exclude)
    return session


def _add_branch(branch: Tree, node: PathNode) -> None:
    for child in node.children:
        label = f"{_MARKERS[child.state]} {escape(child.name)}"
        if child.is_leaf:
            if child.repository is not None:
                label += f" [dim]({escape(child.repository.name)})[/dim]"
            branch.add(label)
        else:
            _add_branch(branch.add(f"{label}/"), child)


def _display_tree(session: UntrackSession) -> None:
    root = session.tree.root
    tree = Tree(f"{_MARKERS[root.state]} [bold]{escape(str(root.path))}[/bold]")
    _add_branch(tree, root)
    rprint(tree)


def _display_summary(session: UntrackSession) -> None:
    selection = session.selection()
    totals: dict[str, int] = {}
    for leaf in session.tree.leaves():
        if leaf.repository is not None:
            key = leaf.repository.canonical_path
            totals[key] = totals.get(key, 0) + 1

    table = Table(title=f"Repositories ({len(totals)})")
    table.add_column("Repository", style="cyan")
    table.add_column("Selected", justify="right", style="green")
    table.add_column("Files", justify="right")
    checked_by_root = {repo.canonical_path: len(files) for repo, files in selection.items()}
    for root, total in totals.items():
        table.add_row(escape(root), str(checked_by_root.get(root, 0)), str(total))
    rprint(table)


@app.command("list")
def list_files(
    project: ProjectArg = ".",
    mapping: MappingOpt = None,
    exclude: ExcludeOpt = None,
) -> None:
    """Show tracked files that match ignore rules as a selection tree."""
    try:
        session = _build_session(project, mapping, exclude)
    except (ValueError, VCSError) as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if session.file_count() == 0:
        rprint("[green]No tracked files match ignore rules.[/green]")
        return

    _display_tree(session)
    _display_summary(session)


@app.command()
def preview(
    project: ProjectArg = ".",
    mapping: MappingOpt = None,
    exclude: ExcludeOpt = None,
    only: Annotated[
        list[str] | None,
        typer.Option("--only", help="Keep only files matching this glob (repeatable)"),
    ] = None,
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Write the script to a file")
    ] = None,
    plain: Annotated[bool, typer.Option("--plain", help="No syntax highlighting")] = False,
) -> None:
    """Print the commands that stop tracking the selected files."""
    try:
        session = _build_session(project, mapping, exclude)
    except (ValueError, VCSError) as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if only:
        session.only(only)

    text = session.commands_text()
    if not text:
        rprint("[yellow]Nothing selected.[/yellow]")
        return

    if output:
        Path(output).write_text(text)
        count = sum(len(files) for files in session.selection().values())
        rprint(f"[green]Written to[/green] {escape(output)} ({count} file(s))")
    elif plain:
        typer.echo(text, nl=False)
    else:
        rprint(Syntax(text, "bash"))


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default untracker.yaml in current directory."""
    target = Path("untracker.yaml")
    if target.exists() and not force:
        rprint("[yellow]untracker.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
