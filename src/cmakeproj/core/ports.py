"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from concurrent.futures import Future

OutputCallback = Callable[[str], None]


@runtime_checkable
class FilesystemPort(Protocol):
    """Read-only filesystem access for (possibly host-qualified) paths."""

    def canonicalize(self, path: str) -> str:
        """Return the absolute path with symlinks resolved.

        The path does not need to exist.
        """
        ...

    def exists(self, path: str) -> bool:
        """Check whether path names an existing file or directory."""
        ...

    def is_file(self, path: str) -> bool:
        """Check whether path names an existing regular file."""
        ...

    def read_text(self, path: str) -> str:
        """Read a UTF-8 text file.

        Raises:
            OSError: If the file cannot be read.
        """
        ...


@runtime_checkable
class CommandRunnerPort(Protocol):
    """Executes external programs in a working directory.

    The core builds argument lists and working directories; adapters
    own process spawning, output capture and any timeout handling.
    """

    def run(self, args: Sequence[str], cwd: str) -> tuple[int, str]:
        """Run a program to completion and capture its output.

        Args:
            args: Program followed by its arguments.
            cwd: Working directory.

        Returns:
            Tuple of (exit status, combined stdout/stderr text).
        """
        ...

    def submit(
        self,
        args: Sequence[str],
        cwd: str,
        on_output: OutputCallback | None = None,
    ) -> Future[int]:
        """Start a program without blocking and stream its output.

        Args:
            args: Program followed by its arguments.
            cwd: Working directory.
            on_output: Called with each output line as it arrives.

        Returns:
            Future resolving to the exit status.
        """
        ...


@runtime_checkable
class ProjectBackend(Protocol):
    """Capability set every project-kind backend implements."""

    def root(self, directory: str) -> str | None:
        """Return the project root for directory, or None if not recognized."""
        ...

    def external_roots(self, directory: str) -> list[str]:
        """Return directories outside the root that belong to the project."""
        ...

    def ignore_rules(self, directory: str) -> list[str]:
        """Return root-relative patterns tooling should not index."""
        ...

    def root_for_build_operations(self, directory: str) -> str | None:
        """Return the directory build commands should run in."""
        ...
