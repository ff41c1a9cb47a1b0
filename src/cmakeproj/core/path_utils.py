"""Path helpers for host-qualified directories and build-directory rules.

Paths are plain strings so they can carry a host qualifier in URI form
("ssh://devbox/home/u/proj"). Local paths have no qualifier.
"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Callable, Iterator
from typing import Union

from cmakeproj.core.exceptions import ConfigurationError


BuildDirectoryRule = Union[str, "os.PathLike[str]", Callable[[str], object]]


def split_host(path: str) -> tuple[str | None, str]:
    """Split a path into its host qualifier and host-local part.

    Args:
        path: Local path or "scheme://host/local/path".

    Returns:
        Tuple of (host qualifier such as "ssh://devbox", or None; local path).
    """
    if "://" in path:
        scheme, rest = path.split("://", 1)
        # Avoid confusing Windows drive letters (C:) with schemes
        if len(scheme) > 1:
            host, sep, local = rest.partition("/")
            return f"{scheme.lower()}://{host}", sep + local if sep else "/"
    return None, path


def host_of(path: str) -> str | None:
    """Return the host qualifier of a path, or None for local paths."""
    return split_host(path)[0]


def join_host(host: str | None, local: str) -> str:
    """Qualify a host-local path with a host prefix."""
    if host is None:
        return local
    return host + local


def is_absolute(path: str) -> bool:
    """Check whether the host-local part of a path is absolute."""
    host, local = split_host(path)
    if host is not None:
        return local.startswith("/")
    return os.path.isabs(local)


def normalize(path: str) -> str:
    """Collapse redundant separators and up-level references."""
    host, local = split_host(path)
    if host is not None:
        return join_host(host, posixpath.normpath(local))
    return os.path.normpath(local)


def join(base: str, relative: str) -> str:
    """Join a relative path onto a (possibly host-qualified) base."""
    host, local = split_host(base)
    if host is not None:
        return join_host(host, posixpath.join(local, relative))
    return os.path.join(local, relative)


def ancestors(path: str) -> Iterator[str]:
    """Yield path itself followed by each parent up to the filesystem root."""
    host, local = split_host(path)
    pathmod = posixpath if host is not None else os.path
    current = local
    while True:
        yield join_host(host, current)
        parent = pathmod.dirname(current)
        if parent == current:
            return
        current = parent


def relative_to(path: str, base: str) -> str | None:
    """Return path relative to base, or None when path is not inside base."""
    host, local = split_host(path)
    base_host, base_local = split_host(base)
    if host != base_host:
        return None
    pathmod = posixpath if host is not None else os.path
    try:
        common = pathmod.commonpath([local, base_local])
    except ValueError:
        return None
    if common != base_local:
        return None
    return pathmod.relpath(local, base_local)


def resolve_build_directory(rule: BuildDirectoryRule, source: str) -> str:
    """Compute the build directory a source directory should use.

    A callable rule is invoked with the source directory and must return a
    path string. An absolute path is used verbatim; a relative one is
    resolved against the source directory.

    The rule must return the same path for every file of a project and
    must depend only on the source path.

    Args:
        rule: Literal path or callable mapping source path to a path.
        source: Absolute source directory.

    Returns:
        Normalized build directory path.

    Raises:
        ConfigurationError: If a callable rule returns something that is
            not a non-empty path.

    Example:
        >>> resolve_build_directory("build", "/home/u/proj")
        '/home/u/proj/build'
    """
    if callable(rule):
        result = rule(source)
        if isinstance(result, os.PathLike):
            result = os.fspath(result)
        if not isinstance(result, str) or not result:
            raise ConfigurationError(
                f"Build-directory function returned {result!r}, expected a path string",
                value=result,
            )
        target = result
    elif isinstance(rule, (str, os.PathLike)):
        target = os.fspath(rule)
    else:
        raise ConfigurationError(
            f"Build-directory rule must be a path or a function, got {rule!r}",
            value=rule,
        )

    if is_absolute(target):
        return target
    return normalize(join(source, target))
