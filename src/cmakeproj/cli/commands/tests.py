"""Test listing and test running commands for CLI."""

from __future__ import annotations

import typer

from cmakeproj.cli import main as cli_main
from cmakeproj.cli.main import _exit_with_error, app, load_project_context
from cmakeproj.core.commands import (
    list_tests_command,
    parse_test_list,
    run_tests_command,
)
from cmakeproj.core.exceptions import TestListError


@app.command(name="tests")
def list_tests(
    directory: str | None = typer.Argument(
        None,
        help="Directory inside the project. Defaults to current directory.",
    ),
) -> None:
    """List the names of the project's tests."""
    config, project, _fs = load_project_context(directory)
    args = list_tests_command(project, config)

    with cli_main._create_runner() as runner:
        try:
            status, output = runner.run(args, project.build)
        except OSError as e:
            typer.echo(f"Error: cannot run {args[0]}: {e}", err=True)
            raise typer.Exit(1) from None

    if status != 0:
        typer.echo(output, err=True)
        raise typer.Exit(status)

    try:
        names = parse_test_list(output)
    except TestListError as e:
        raise _exit_with_error(e) from None

    if not names:
        typer.echo("No tests found.")
        return
    for name in names:
        typer.echo(name)


@app.command(name="test")
def run_tests(
    pattern: str | None = typer.Argument(
        None,
        help="Regular expression selecting tests by name. Runs all tests if omitted.",
    ),
    directory: str | None = typer.Option(
        None,
        "--dir",
        "-C",
        help="Directory inside the project. Defaults to current directory.",
    ),
) -> None:
    """Run the project's tests."""
    config, project, _fs = load_project_context(directory)
    args = run_tests_command(project, config, pattern)
    status = cli_main.run_streaming(args, project.build)
    if status != 0:
        raise typer.Exit(status)
