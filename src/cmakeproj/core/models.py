"""Core domain models for cmakeproj.

These models are pure Python dataclasses with no I/O dependencies.
They represent a resolved project and the typed contents of a cache file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class CacheType(str, Enum):
    """Kinds of entries a CMake cache file can record."""

    BOOL = "BOOL"
    PATH = "PATH"
    FILEPATH = "FILEPATH"
    STRING = "STRING"
    INTERNAL = "INTERNAL"
    STATIC = "STATIC"
    UNINITIALIZED = "UNINITIALIZED"

    @property
    def is_public(self) -> bool:
        """Whether entries of this kind are user-facing options."""
        return self in PUBLIC_CACHE_TYPES


PUBLIC_CACHE_TYPES = frozenset(
    {CacheType.BOOL, CacheType.PATH, CacheType.FILEPATH, CacheType.STRING}
)


@dataclass(frozen=True, slots=True)
class Project:
    """A source tree paired with its out-of-tree build directory.

    Both paths are canonical and may carry a host qualifier
    (e.g. "ssh://devbox/home/u/proj").

    Attributes:
        source: Directory containing the top-level CMakeLists.txt.
        build: Directory holding (or about to hold) CMakeCache.txt.

    Example:
        >>> project = Project(source="/home/u/proj", build="/home/u/proj/build")
        >>> project.build
        '/home/u/proj/build'
    """

    source: str
    build: str

    def __post_init__(self) -> None:
        """Validate project fields after initialization."""
        if not self.source:
            raise ValueError("Project source cannot be empty")
        if not self.build:
            raise ValueError("Project build cannot be empty")


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A typed, documented configuration variable from a cache file.

    Attributes:
        name: Variable name, unique within one cache file.
        type: One of the public cache kinds.
        value: Raw value text, everything after the first "=".
        docstring: Concatenated "//" documentation lines, possibly empty.
    """

    name: str
    type: CacheType
    value: str
    docstring: str = ""


@dataclass(frozen=True, slots=True)
class CacheFile:
    """Result of parsing one cache file.

    Attributes:
        entries: Public entries keyed by name, in encounter order.
        home_directory: Recorded CMAKE_HOME_DIRECTORY, if present.
    """

    entries: dict[str, CacheEntry] = field(default_factory=dict)
    home_directory: str | None = None
