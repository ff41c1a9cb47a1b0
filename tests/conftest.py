"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite.
"""

from __future__ import annotations

import posixpath
from concurrent.futures import Future
from pathlib import Path
from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from cmakeproj.core.ports import OutputCallback


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, parsing and resolution")
    config.addinivalue_line("markers", "adapters: Filesystem and subprocess adapters")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


def cache_text(home: str, extra: str = "") -> str:
    """Render a minimal CMakeCache.txt recording home as the source path."""
    return (
        "# This is the CMakeCache file.\n"
        "# For build in directory: ignored\n"
        "\n"
        "//Choose the type of build.\n"
        "CMAKE_BUILD_TYPE:STRING=Debug\n"
        f"{extra}"
        "//Source directory with the top level CMakeLists.txt file for this\n"
        "// project\n"
        f"CMAKE_HOME_DIRECTORY:INTERNAL={home}\n"
    )


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """tmp_path with symlinks resolved, matching canonical resolver output."""
    return tmp_path.resolve()


@pytest.fixture
def make_project(root: Path) -> Callable[..., Path]:
    """Factory creating a source tree with an optional configured build dir.

    Returns the source directory.
    """

    def _make(
        source: str = "proj",
        build: str | None = "proj/build",
        home: str | None = None,
        extra: str = "",
    ) -> Path:
        source_dir = root / source
        source_dir.mkdir(parents=True, exist_ok=True)
        (source_dir / "CMakeLists.txt").write_text("project(demo)\n")
        if build is not None:
            build_dir = root / build
            build_dir.mkdir(parents=True, exist_ok=True)
            recorded = home if home is not None else str(source_dir)
            (build_dir / "CMakeCache.txt").write_text(cache_text(recorded, extra))
        return source_dir

    return _make


class FakeFilesystem:
    """In-memory FilesystemPort keyed by full (possibly host-qualified) path."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files = dict(files or {})

    def canonicalize(self, path: str) -> str:
        if "://" in path:
            scheme, rest = path.split("://", 1)
            host, _, local = rest.partition("/")
            return f"{scheme}://{host}{posixpath.normpath('/' + local)}"
        return posixpath.normpath(path)

    def exists(self, path: str) -> bool:
        prefix = path.rstrip("/") + "/"
        return path in self.files or any(f.startswith(prefix) for f in self.files)

    def is_file(self, path: str) -> bool:
        return path in self.files

    def read_text(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None


@pytest.fixture
def fake_fs() -> FakeFilesystem:
    """Empty in-memory filesystem; tests populate .files directly."""
    return FakeFilesystem()


class FakeRunner:
    """CommandRunnerPort recording invocations and replaying canned results."""

    def __init__(self, status: int = 0, output: str = "") -> None:
        self.status = status
        self.output = output
        self.calls: list[tuple[list[str], str]] = []

    def run(self, args: Sequence[str], cwd: str) -> tuple[int, str]:
        self.calls.append((list(args), cwd))
        return self.status, self.output

    def submit(
        self,
        args: Sequence[str],
        cwd: str,
        on_output: OutputCallback | None = None,
    ) -> Future[int]:
        self.calls.append((list(args), cwd))
        if on_output is not None:
            for line in self.output.splitlines():
                on_output(line)
        future: Future[int] = Future()
        future.set_result(self.status)
        return future

    def __enter__(self) -> FakeRunner:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner that succeeds with no output."""
    return FakeRunner()


@pytest.fixture
def render_cache() -> Callable[..., str]:
    """Function rendering CMakeCache.txt text for a recorded home directory."""
    return cache_text


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """Factory for runners with a canned exit status and output."""
    return FakeRunner
