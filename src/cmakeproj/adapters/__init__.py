"""Adapters implementing the core ports."""

from cmakeproj.adapters.filesystem import (
    LocalFilesystem,
    RouterFilesystem,
    create_router,
)
from cmakeproj.adapters.runner import SubprocessRunner


__all__ = ["LocalFilesystem", "RouterFilesystem", "SubprocessRunner", "create_router"]
