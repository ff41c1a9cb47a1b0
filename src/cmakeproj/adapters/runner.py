"""Subprocess adapter implementing CommandRunnerPort."""

from __future__ import annotations

import logging
import subprocess
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence
    from concurrent.futures import Future
    from types import TracebackType

    from cmakeproj.core.ports import OutputCallback


logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Runs external programs on this machine.

    Synchronous runs capture output; submitted runs execute on a thread
    pool and stream output line by line, keeping concurrency out of the
    core domain.

    Example:
        with SubprocessRunner() as runner:
            status = runner.submit(["ctest"], cwd=project.build, on_output=print).result()
    """

    def __init__(self, max_workers: int | None = None) -> None:
        """Initialize the runner.

        Args:
            max_workers: Maximum number of concurrent submitted runs.
                None uses the executor default.
        """
        self._executor = ThreadPoolExecutor(max_workers=max_workers)

    def run(self, args: Sequence[str], cwd: str) -> tuple[int, str]:
        """Run a program to completion and capture combined output.

        Raises:
            OSError: If the program cannot be started.
        """
        logger.debug("Running %s in %s", list(args), cwd)
        completed = subprocess.run(
            list(args),
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
        return completed.returncode, completed.stdout

    def submit(
        self,
        args: Sequence[str],
        cwd: str,
        on_output: OutputCallback | None = None,
    ) -> Future[int]:
        """Start a program on the thread pool, streaming its output.

        Returns:
            Future resolving to the exit status. Startup failures are set
            as the future's exception.
        """
        return self._executor.submit(self._stream, list(args), cwd, on_output)

    def _stream(
        self, args: list[str], cwd: str, on_output: OutputCallback | None
    ) -> int:
        logger.debug("Starting %s in %s", args, cwd)
        with subprocess.Popen(
            args,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
        ) as process:
            assert process.stdout is not None
            for line in process.stdout:
                if on_output is not None:
                    on_output(line.rstrip("\n"))
            status = process.wait()
        logger.debug("%s exited with %d", args[0], status)
        return status

    def shutdown(self) -> None:
        """Wait for submitted runs and release the thread pool."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> SubprocessRunner:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager, waiting for submitted runs."""
        self.shutdown()
