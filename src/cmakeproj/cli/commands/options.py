"""Options command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from cmakeproj.cli.formatting import _build_options_table
from cmakeproj.cli.main import _exit_with_error, app, load_project_context
from cmakeproj.core.cache_parser import read_cache_file
from cmakeproj.core.exceptions import CacheReadError


@app.command()
def options(
    directory: str | None = typer.Argument(
        None,
        help="Directory inside the project. Defaults to current directory.",
    ),
) -> None:
    """List the configurable cache options of a configured project."""
    _config, project, fs = load_project_context(directory)

    try:
        cache = read_cache_file(project.build, fs)
    except CacheReadError as e:
        raise _exit_with_error(e) from None

    if not cache.entries:
        typer.echo("No options found in the cache.")
        return

    # Force terminal output to ensure tables render correctly in all environments
    console = Console(force_terminal=True)
    console.print(_build_options_table(list(cache.entries.values())))
