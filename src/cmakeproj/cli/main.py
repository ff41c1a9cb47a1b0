"""CLI commands for cmakeproj."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.logging import RichHandler

from cmakeproj.core.exceptions import CmakeprojError


if TYPE_CHECKING:
    from cmakeproj import Project, ProjectConfig, SubprocessRunner
    from cmakeproj.core.ports import FilesystemPort


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="cmakeproj",
    help="Locate, configure, build and test out-of-tree CMake projects.",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through Rich on stderr.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


@app.callback()
def _main_options(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging.",
    ),
) -> None:
    """Locate, configure, build and test out-of-tree CMake projects."""
    setup_logging(verbose)


def _exit_with_error(error: CmakeprojError) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    return typer.Exit(1)


def _create_filesystem() -> FilesystemPort:
    from cmakeproj.adapters import create_router

    return create_router()


def _create_runner() -> SubprocessRunner:
    from cmakeproj.adapters import SubprocessRunner

    return SubprocessRunner(max_workers=1)


def load_project_context(
    directory: str | None = None,
) -> tuple[ProjectConfig, Project, FilesystemPort]:
    """Resolve settings and project for CLI commands.

    Args:
        directory: Directory inside the project. Defaults to current directory.

    Returns:
        Tuple of (effective settings, resolved Project, filesystem adapter).

    Raises:
        typer.Exit: If settings are invalid or no consistent project is found.
    """
    from cmakeproj.config import load_config
    from cmakeproj.core.path_utils import host_of
    from cmakeproj.core.resolver import resolve_project

    start = directory if directory else str(Path.cwd())
    fs = _create_filesystem()
    try:
        # Remote directories take settings from the local working directory
        config = load_config(Path(start) if host_of(start) is None else None)
        project = resolve_project(start, config, fs)
    except CmakeprojError as e:
        raise _exit_with_error(e) from None
    return config, project, fs


def run_streaming(args: list[str], cwd: str) -> int:
    """Run a command, echoing its output as it arrives.

    Returns:
        The command's exit status.

    Raises:
        typer.Exit: If the command cannot be started.
    """
    with _create_runner() as runner:
        future = runner.submit(args, cwd, on_output=typer.echo)
        try:
            return future.result()
        except OSError as e:
            typer.echo(f"Error: cannot run {args[0]}: {e}", err=True)
            raise typer.Exit(1) from None


@app.command()
def root(
    directory: str | None = typer.Argument(
        None,
        help="Directory inside the project. Defaults to current directory.",
    ),
) -> None:
    """Show the source and build directories of a project."""
    _config, project, _fs = load_project_context(directory)
    typer.echo(f"Source: {project.source}")
    typer.echo(f"Build: {project.build}")


@app.command()
def configure(
    directory: str | None = typer.Argument(
        None,
        help="Directory inside the project. Defaults to current directory.",
    ),
    fresh: bool = typer.Option(
        False,
        "--fresh",
        help="Discard the existing cache and configure from scratch.",
    ),
    define: list[str] = typer.Option(
        [],
        "--define",
        "-D",
        help="Cache assignment NAME:TYPE=VALUE. May be repeated.",
    ),
) -> None:
    """Configure the project, creating the build directory if needed."""
    from cmakeproj.core.commands import (
        configure_command,
        is_first_configure,
        prepare_build_directory,
    )

    config, project, fs = load_project_context(directory)
    first_run = is_first_configure(project, fs)
    args = configure_command(
        project, config, fresh=fresh, definitions=define, first_run=first_run
    )
    prepare_build_directory(project)

    status = run_streaming(args, project.build)
    if status != 0:
        raise typer.Exit(status)


@app.command()
def build(
    directory: str | None = typer.Argument(
        None,
        help="Directory inside the project. Defaults to current directory.",
    ),
    target: str | None = typer.Option(
        None,
        "--target",
        "-t",
        help="Build only this target.",
    ),
) -> None:
    """Build the project in its build directory."""
    from cmakeproj.core.commands import build_command

    config, project, _fs = load_project_context(directory)
    status = run_streaming(build_command(project, config, target), project.build)
    if status != 0:
        raise typer.Exit(status)


def main() -> None:
    """Entry point for the CLI."""
    app()
