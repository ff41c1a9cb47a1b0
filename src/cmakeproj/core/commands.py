"""Command-line construction for configure, build and test runs.

Nothing here spawns processes: functions return the argument list and
the working directory is always the project's build directory.
"""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from cmakeproj.core import path_utils
from cmakeproj.core.cache_parser import CACHE_FILE_NAME
from cmakeproj.core.exceptions import TestListError


if TYPE_CHECKING:
    from collections.abc import Sequence

    from cmakeproj.config import ProjectConfig
    from cmakeproj.core.models import Project
    from cmakeproj.core.ports import FilesystemPort


def resolve_program(program: str, build: str) -> str:
    """Locate a tool given as a bare command name or a path.

    Args:
        program: Command name looked up on PATH, or an absolute path, or a
            path relative to the build directory.
        build: The project's build directory.

    Returns:
        The program location to execute.
    """
    if "/" not in program and os.sep not in program:
        if path_utils.host_of(build) is None:
            return shutil.which(program) or program
        return program
    if path_utils.is_absolute(program):
        return program
    _host, local_build = path_utils.split_host(build)
    return path_utils.normalize(os.path.join(local_build, program))


def is_first_configure(project: Project, fs: FilesystemPort) -> bool:
    """Check whether the build directory has never been configured."""
    return not fs.is_file(path_utils.join(project.build, CACHE_FILE_NAME))


def configure_command(
    project: Project,
    config: ProjectConfig,
    fresh: bool = False,
    definitions: Sequence[str] = (),
    first_run: bool = False,
) -> list[str]:
    """Build the configure invocation.

    Initial cache assignments from config apply only on the first run;
    explicit definitions are always passed.

    Args:
        project: Resolved project.
        config: Tool locations and initial cache assignments.
        fresh: Discard the existing cache (--fresh).
        definitions: Extra NAME:TYPE=VALUE assignments.
        first_run: Whether the build directory has no cache yet.

    Returns:
        Argument list, program first.
    """
    program = resolve_program(config.configure_program, project.build)
    args = [program]
    if fresh:
        args.append("--fresh")
    assignments = [*config.initial_cache] if first_run else []
    assignments.extend(definitions)
    args.extend(f"-D{assignment}" for assignment in assignments)
    args.append(path_utils.split_host(project.source)[1])
    return args


def build_command(
    project: Project, config: ProjectConfig, target: str | None = None
) -> list[str]:
    """Build the native build invocation (<program> --build <dir>)."""
    program = resolve_program(
        config.build_program or config.configure_program, project.build
    )
    args = [program, "--build", path_utils.split_host(project.build)[1]]
    if target:
        args.extend(["--target", target])
    return args


def run_tests_command(
    project: Project, config: ProjectConfig, pattern: str | None = None
) -> list[str]:
    """Build the test-tool invocation.

    Args:
        project: Resolved project.
        config: Test tool location and extra arguments.
        pattern: Regular expression selecting tests by name. None runs all.

    Returns:
        Argument list, program first.
    """
    args = [resolve_program(config.test_program, project.build), *config.test_args]
    if pattern:
        args.extend(["-R", pattern])
    return args


def list_tests_command(project: Project, config: ProjectConfig) -> list[str]:
    """Build the invocation that prints the JSON test list."""
    return [
        resolve_program(config.test_program, project.build),
        *config.test_args,
        "--show-only=json-v1",
    ]


def parse_test_list(text: str) -> list[str]:
    """Extract test names from the test tool's JSON listing.

    Args:
        text: Document of the form {"tests": [{"name": ...}, ...]}.

    Returns:
        Test names in listing order.

    Raises:
        TestListError: If the document is not valid JSON or lacks names.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise TestListError(f"Test list is not valid JSON: {e}", cause=e) from e

    tests = document.get("tests") if isinstance(document, dict) else None
    if not isinstance(tests, list):
        raise TestListError("Test list has no 'tests' array")

    names = []
    for test in tests:
        if not isinstance(test, dict) or not isinstance(test.get("name"), str):
            raise TestListError(f"Test list element has no name: {test!r}")
        names.append(test["name"])
    return names


def prepare_build_directory(project: Project) -> None:
    """Create the build directory and its parents if missing.

    Only local build directories are created; remote ones are left to
    the command runner.
    """
    host, local = path_utils.split_host(project.build)
    if host is None:
        Path(local).mkdir(parents=True, exist_ok=True)
