"""Project root resolution.

Reconciles a source directory with its configured build directory. The
build directory is searched for upward from the start directory and the
source directory is derived from its cache; failing that, the outermost
CMakeLists.txt above the start directory is used. Both results must agree
with the configured build-directory rule.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cmakeproj.core import path_utils
from cmakeproj.core.cache_parser import (
    CACHE_FILE_NAME,
    HOME_DIRECTORY_KEY,
    cache_file_path,
    read_cache_file,
)
from cmakeproj.core.exceptions import (
    ConfigurationError,
    CrossHostError,
    InconsistentConfigError,
    MalformedCacheError,
    ProjectNotFoundError,
)
from cmakeproj.core.models import Project


if TYPE_CHECKING:
    from cmakeproj.config import ProjectConfig
    from cmakeproj.core.ports import FilesystemPort


logger = logging.getLogger(__name__)

LISTS_FILE_NAME = "CMakeLists.txt"


def find_build_directory(start: str, fs: FilesystemPort) -> str | None:
    """Return the nearest ancestor of start (inclusive) holding a cache file."""
    for directory in path_utils.ancestors(start):
        if fs.is_file(path_utils.join(directory, CACHE_FILE_NAME)):
            return directory
    return None


def find_source_directory(start: str, fs: FilesystemPort) -> str | None:
    """Return the outermost ancestor of start (inclusive) holding CMakeLists.txt.

    Nested projects are common (a subdirectory with its own project()
    call), so the search keeps ascending past each match.
    """
    found = None
    for directory in path_utils.ancestors(start):
        if fs.is_file(path_utils.join(directory, LISTS_FILE_NAME)):
            found = directory
    return found


def source_from_build(build: str, fs: FilesystemPort) -> str:
    """Derive the source directory recorded in a build directory's cache.

    The cache stores a host-local path, so a host-qualified build
    directory lends its qualifier to the result.

    Raises:
        MalformedCacheError: If the cache has no home directory entry.
        ConfigurationError: If the recorded home directory is not absolute.
    """
    cache = read_cache_file(build, fs)
    home = cache.home_directory
    if not home:
        raise MalformedCacheError(
            f"{cache_file_path(build)} has no {HOME_DIRECTORY_KEY} entry",
            cache_path=cache_file_path(build),
        )
    if path_utils.host_of(home) is None and not path_utils.is_absolute(home):
        raise ConfigurationError(
            f"{HOME_DIRECTORY_KEY} in {cache_file_path(build)} is not absolute: {home}",
            value=home,
        )

    host = path_utils.host_of(build)
    if host is not None and path_utils.host_of(home) is None:
        home = path_utils.join_host(host, home)
    return fs.canonicalize(home)


def resolve_project(
    start: str,
    config: ProjectConfig | None = None,
    fs: FilesystemPort | None = None,
) -> Project:
    """Determine the (source, build) pair for the project containing start.

    Args:
        start: Any directory, possibly host-qualified.
        config: Settings providing the build-directory rule.
            Defaults to ProjectConfig().
        fs: Filesystem adapter. Defaults to local/host routing.

    Returns:
        Project with canonical source and build directories.

    Raises:
        ProjectNotFoundError: If no markers exist above start.
        InconsistentConfigError: If a discovered build directory differs
            from the configured one.
        CrossHostError: If source and build are on different hosts.
        MalformedCacheError: If a discovered cache lacks its home directory.
        ConfigurationError: If the build-directory rule is invalid.
        CacheReadError: If a discovered cache cannot be read.

    Example:
        >>> project = resolve_project("/home/u/proj/src/lib")  # doctest: +SKIP
        >>> project.build  # doctest: +SKIP
        '/home/u/proj/build'
    """
    if config is None:
        from cmakeproj.config import ProjectConfig

        config = ProjectConfig()
    if fs is None:
        from cmakeproj.adapters.filesystem import create_router

        fs = create_router()

    start = fs.canonicalize(start)

    discovered_build = find_build_directory(start, fs)
    if discovered_build is not None:
        logger.debug("Found build directory %s above %s", discovered_build, start)
        source = source_from_build(discovered_build, fs)
    else:
        source = find_source_directory(start, fs)
        if source is None:
            raise ProjectNotFoundError(start)
    logger.debug("Source directory for %s is %s", start, source)

    expected_build = fs.canonicalize(
        path_utils.resolve_build_directory(config.build_directory, source)
    )

    if discovered_build is not None and discovered_build != expected_build:
        raise InconsistentConfigError(discovered_build, expected_build)

    if path_utils.host_of(source) != path_utils.host_of(expected_build):
        raise CrossHostError(source, expected_build)

    return Project(source=source, build=expected_build)
