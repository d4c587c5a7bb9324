"""Typer CLI entrypoint for project-detect."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from . import __version__
from .config import configure_logging, load_config
from .detector import detect_project, detect_project_from_file, is_in_project
from .exceptions import ProjectDetectError
from .models import DetectorConfig
from .normalize import extract_project_from_source, normalize_project

app = typer.Typer(
    help="Detect the host/owner/repo project a path belongs to",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass(slots=True)
class AppState:
    config: DetectorConfig
    console: Console
    verbose: bool = False


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"project-detect {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the project-detect version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    configure_logging(verbose)
    console = Console()
    try:
        config = load_config()
    except ProjectDetectError as exc:
        Console(stderr=True).print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc
    ctx.obj = AppState(config=config, console=console, verbose=verbose)


def _require_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if not isinstance(state, AppState):  # pragma: no cover
        raise typer.Exit(1)
    return state


@app.command(help="Detect the project for a directory (or file with --file)")
def detect(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Location to inspect (defaults to the current directory)."),
    as_file: bool = typer.Option(False, "--file", help="Treat PATH as a file and inspect its directory."),
    as_json: bool = typer.Option(False, "--json", help="Output JSON for scripting."),
) -> None:
    state = _require_state(ctx)
    location = path if path is not None else Path.cwd()
    if as_file:
        project = detect_project_from_file(location, state.config)
    else:
        project = detect_project(location, state.config)
    if as_json:
        typer.echo(json.dumps({"path": str(location), "project": project}, indent=2))
    elif project:
        typer.echo(project)
    else:
        state.console.print(f"[yellow]No project detected for {location}[/yellow]")
    if not project:
        raise typer.Exit(1)


@app.command(help="Exit 0 when PATH belongs to PROJECT")
def check(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Location to inspect."),
    project: str = typer.Argument(..., help="Project identifier, URL, or owner/repo."),
) -> None:
    state = _require_state(ctx)
    expected = normalize_project(project, state.config) or project
    if is_in_project(path, expected, state.config):
        typer.echo("yes")
        return
    typer.echo("no")
    raise typer.Exit(1)


@app.command(help="Print the canonical host/owner/repo form of VALUE")
def normalize(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="URL, path, owner/repo, or identifier."),
) -> None:
    state = _require_state(ctx)
    _emit(state, normalize_project(value, state.config), f"Cannot normalize {value!r}")


@app.command(help="Extract a project reference from free text")
def extract(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Arbitrary text such as a log line."),
) -> None:
    state = _require_state(ctx)
    _emit(state, extract_project_from_source(text, state.config), "No project reference found")


def _emit(state: AppState, project: str | None, failure: str) -> None:
    if project:
        typer.echo(project)
        return
    state.console.print(f"[yellow]{failure}[/yellow]")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
