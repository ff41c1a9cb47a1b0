"""Project-kind backends.

Each backend implements the ProjectBackend capability set. The set of
kinds is closed; classify_directory dispatches through the registry in
order and returns the first backend that recognizes a directory.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from cmakeproj.core import path_utils
from cmakeproj.core.exceptions import ProjectNotFoundError
from cmakeproj.core.resolver import resolve_project


if TYPE_CHECKING:
    from collections.abc import Sequence

    from cmakeproj.config import ProjectConfig
    from cmakeproj.core.models import Project
    from cmakeproj.core.ports import FilesystemPort, ProjectBackend


logger = logging.getLogger(__name__)


class BackendKind(str, Enum):
    """Known project kinds, in default classification order."""

    CMAKE = "cmake"
    VCS = "vcs"


class CMakeBackend:
    """Backend for out-of-tree CMake projects."""

    kind = BackendKind.CMAKE

    def __init__(self, config: ProjectConfig, fs: FilesystemPort) -> None:
        self._config = config
        self._fs = fs

    def project(self, directory: str) -> Project:
        """Resolve the project, propagating every resolution error."""
        return resolve_project(directory, self._config, self._fs)

    def root(self, directory: str) -> str | None:
        """Return the source directory, or None outside CMake projects."""
        try:
            return self.project(directory).source
        except ProjectNotFoundError:
            logger.debug("%s is not inside a CMake project", directory)
            return None

    def external_roots(self, directory: str) -> list[str]:
        """Return the build directory when it lives outside the source tree."""
        try:
            project = self.project(directory)
        except ProjectNotFoundError:
            return []
        if path_utils.relative_to(project.build, project.source) is None:
            return [project.build]
        return []

    def ignore_rules(self, directory: str) -> list[str]:
        """Return the build directory as a pattern when inside the source tree."""
        try:
            project = self.project(directory)
        except ProjectNotFoundError:
            return []
        relative = path_utils.relative_to(project.build, project.source)
        if relative is None or relative == ".":
            return []
        return [relative.replace("\\", "/") + "/"]

    def root_for_build_operations(self, directory: str) -> str | None:
        """Return the build directory."""
        try:
            return self.project(directory).build
        except ProjectNotFoundError:
            return None


class VcsBackend:
    """Fallback backend rooted at the nearest version-control checkout."""

    kind = BackendKind.VCS
    markers = (".git", ".hg", ".svn")

    def __init__(self, fs: FilesystemPort) -> None:
        self._fs = fs

    def root(self, directory: str) -> str | None:
        """Return the nearest ancestor holding a version-control marker."""
        start = self._fs.canonicalize(directory)
        for parent in path_utils.ancestors(start):
            for marker in self.markers:
                if self._fs.exists(path_utils.join(parent, marker)):
                    return parent
        return None

    def external_roots(self, directory: str) -> list[str]:
        """Checkouts have no external roots."""
        return []

    def ignore_rules(self, directory: str) -> list[str]:
        """Checkouts carry their own ignore files."""
        return []

    def root_for_build_operations(self, directory: str) -> str | None:
        """Build in the checkout root."""
        return self.root(directory)


def default_backends(
    config: ProjectConfig, fs: FilesystemPort
) -> dict[BackendKind, ProjectBackend]:
    """Create one backend per kind, in classification order."""
    return {
        BackendKind.CMAKE: CMakeBackend(config, fs),
        BackendKind.VCS: VcsBackend(fs),
    }


def classify_directory(
    directory: str,
    backends: dict[BackendKind, ProjectBackend],
    order: Sequence[BackendKind] | None = None,
) -> tuple[BackendKind, str] | None:
    """Find the first backend that recognizes a directory.

    Args:
        directory: Directory to classify.
        backends: Backend per kind.
        order: Kinds to try. Defaults to the registry order.

    Returns:
        Tuple of (kind, project root), or None if no backend applies.
    """
    for kind in order if order is not None else list(backends):
        root = backends[kind].root(directory)
        if root is not None:
            logger.debug("Classified %s as %s project at %s", directory, kind.value, root)
            return kind, root
    return None
