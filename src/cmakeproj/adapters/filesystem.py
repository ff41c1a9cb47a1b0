"""Filesystem adapters implementing FilesystemPort."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from cmakeproj.core.exceptions import ConfigurationError
from cmakeproj.core.path_utils import split_host


if TYPE_CHECKING:
    from cmakeproj.core.ports import FilesystemPort


class LocalFilesystem:
    """Filesystem adapter for paths on this machine."""

    def canonicalize(self, path: str) -> str:
        """Resolve symlinks and make path absolute (strict=False)."""
        return str(Path(path).expanduser().resolve())

    def exists(self, path: str) -> bool:
        """Check whether path exists."""
        return Path(path).exists()

    def is_file(self, path: str) -> bool:
        """Check whether path is an existing regular file."""
        return Path(path).is_file()

    def read_text(self, path: str) -> str:
        """Read a UTF-8 text file."""
        return Path(path).read_text(encoding="utf-8")


class RouterFilesystem:
    """Filesystem adapter that routes to backends based on host qualifier.

    Implements FilesystemPort by delegating to scheme-specific adapters.
    Remote adapters receive the full host-qualified path.
    """

    def __init__(self, backends: dict[str | None, FilesystemPort]) -> None:
        """Initialize with scheme-to-adapter mapping.

        Args:
            backends: Mapping of scheme (e.g., 'ssh') to FilesystemPort adapter.
                      Use None as key for local paths without a host qualifier.
        """
        self._backends = backends

    def _get_backend(self, path: str) -> FilesystemPort:
        host, _local = split_host(path)
        scheme = host.split("://", 1)[0] if host is not None else None
        if scheme in self._backends:
            return self._backends[scheme]
        scheme_display = f"'{scheme}'" if scheme else "local paths"
        raise ConfigurationError(
            f"No filesystem backend registered for {scheme_display}", value=path
        )

    def canonicalize(self, path: str) -> str:
        """Canonicalize by delegating to appropriate backend."""
        return self._get_backend(path).canonicalize(path)

    def exists(self, path: str) -> bool:
        """Check existence by delegating to appropriate backend."""
        return self._get_backend(path).exists(path)

    def is_file(self, path: str) -> bool:
        """Check file existence by delegating to appropriate backend."""
        return self._get_backend(path).is_file(path)

    def read_text(self, path: str) -> str:
        """Read file by delegating to appropriate backend."""
        return self._get_backend(path).read_text(path)


def create_router(
    remote: dict[str, FilesystemPort] | None = None,
) -> RouterFilesystem:
    """Create a RouterFilesystem with a local backend.

    Args:
        remote: Optional mapping of scheme (e.g. 'ssh') to adapter for
            host-qualified paths.

    Returns:
        RouterFilesystem with LocalFilesystem for unqualified paths.
    """
    backends: dict[str | None, FilesystemPort] = {None: LocalFilesystem()}
    if remote:
        backends.update(remote)
    return RouterFilesystem(backends)
