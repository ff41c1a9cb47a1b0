"""CMakeCache.txt parsing.

The cache file is line oriented with three kinds of meaningful lines:
"#" comments, "//" documentation and NAME:TYPE=VALUE assignments.
Documentation lines accumulate until the next assignment consumes them.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from cmakeproj.core import path_utils
from cmakeproj.core.exceptions import CacheReadError
from cmakeproj.core.models import CacheEntry, CacheFile, CacheType


if TYPE_CHECKING:
    from cmakeproj.core.ports import FilesystemPort


logger = logging.getLogger(__name__)

CACHE_FILE_NAME = "CMakeCache.txt"
HOME_DIRECTORY_KEY = "CMAKE_HOME_DIRECTORY"

_ASSIGNMENT_RE = re.compile(
    r"^([A-Za-z0-9_-]+):("
    + "|".join(t.value for t in CacheType)
    + r")=(.*)$"
)


def parse_cache_text(text: str) -> CacheFile:
    """Parse cache file contents into typed entries.

    Only BOOL, PATH, FILEPATH and STRING entries are kept. The INTERNAL
    CMAKE_HOME_DIRECTORY entry is retained separately as home_directory.

    Args:
        text: Full cache file text.

    Returns:
        CacheFile with public entries in encounter order.

    Example:
        >>> cache = parse_cache_text("// Build type\\nCMAKE_BUILD_TYPE:STRING=Release\\n")
        >>> cache.entries["CMAKE_BUILD_TYPE"].docstring
        'Build type'
    """
    entries: dict[str, CacheEntry] = {}
    home_directory: str | None = None
    pending_docstring = ""

    # Only \n and \r\n end lines; other control characters belong to values
    for line in text.split("\n"):
        line = line.removesuffix("\r")
        if line.startswith("#"):
            continue
        if line.startswith("//"):
            pending_docstring += line[2:].lstrip()
            continue

        match = _ASSIGNMENT_RE.match(line)
        if match is None:
            continue

        name, type_name, value = match.groups()
        cache_type = CacheType(type_name)
        if cache_type.is_public:
            # Later occurrences overwrite but keep the first position
            entries[name] = CacheEntry(
                name=name,
                type=cache_type,
                value=value,
                docstring=pending_docstring,
            )
        elif cache_type is CacheType.INTERNAL and name == HOME_DIRECTORY_KEY:
            home_directory = value
        pending_docstring = ""

    return CacheFile(entries=entries, home_directory=home_directory)


def cache_file_path(build_directory: str) -> str:
    """Return the cache file location for a build directory."""
    return path_utils.join(build_directory, CACHE_FILE_NAME)


def read_cache_file(
    build_directory: str, fs: FilesystemPort | None = None
) -> CacheFile:
    """Read and parse the cache file of a build directory.

    Args:
        build_directory: Directory containing CMakeCache.txt.
        fs: Filesystem adapter. Defaults to local/host routing.

    Returns:
        Parsed CacheFile.

    Raises:
        CacheReadError: If the cache file cannot be read.
    """
    if fs is None:
        from cmakeproj.adapters.filesystem import create_router

        fs = create_router()

    path = cache_file_path(build_directory)
    try:
        text = fs.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise CacheReadError(
            f"Cannot read cache file {path}: {e}",
            path=path,
            cause=e,
        ) from e

    logger.debug("Parsing %s", path)
    return parse_cache_text(text)


def parse_cache(
    build_directory: str, fs: FilesystemPort | None = None
) -> dict[str, CacheEntry]:
    """Return the public cache entries of a build directory, keyed by name."""
    return read_cache_file(build_directory, fs).entries
