"""Domain exceptions for cmakeproj.

All library errors inherit from CmakeprojError, allowing callers to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations


class CmakeprojError(Exception):
    """Base class for all cmakeproj exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class ProjectNotFoundError(CmakeprojError):
    """Raised when no source or build marker exists above a directory.

    This is not a fault: the directory simply does not belong to a CMake
    project, and callers may try other classification strategies.

    Attributes:
        start: The directory the search started from.
    """

    def __init__(self, start: str) -> None:
        self.start = start
        super().__init__(f"No CMake project found above {start}")

    @property
    def recovery_hint(self) -> str:
        """Suggest where markers are expected."""
        return "Run from inside a directory tree containing CMakeLists.txt"


class InconsistentConfigError(CmakeprojError):
    """Raised when a discovered build directory differs from the configured one.

    Attributes:
        discovered: Build directory found by walking up from the start directory.
        expected: Build directory computed from the build-directory rule.
    """

    def __init__(self, discovered: str, expected: str) -> None:
        self.discovered = discovered
        self.expected = expected
        super().__init__(
            f"Build directory {discovered} does not match configured "
            f"build directory {expected}"
        )

    @property
    def recovery_hint(self) -> str:
        """Suggest reconciling the two directories."""
        return (
            f"Remove the stale cache in {self.discovered} or change the "
            f"build-directory setting to point at it"
        )


class CrossHostError(CmakeprojError):
    """Raised when source and build directories live on different hosts.

    Attributes:
        source: The source directory.
        build: The build directory.
    """

    def __init__(self, source: str, build: str) -> None:
        self.source = source
        self.build = build
        super().__init__(
            f"Source directory {source} and build directory {build} "
            f"are on different hosts"
        )

    @property
    def recovery_hint(self) -> str:
        """Suggest a relative build-directory rule."""
        return "Use a relative build-directory rule so the build stays on the source host"


class MalformedCacheError(CmakeprojError):
    """Raised when a cache file lacks data required for root resolution.

    Attributes:
        cache_path: Path to the offending cache file.
    """

    def __init__(self, message: str, cache_path: str) -> None:
        self.cache_path = cache_path
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest regenerating the cache."""
        return f"Delete {self.cache_path} and configure the project again"


class ConfigurationError(CmakeprojError):
    """Raised for invalid settings or build-directory rule results.

    Attributes:
        value: The offending value, if any.
    """

    def __init__(self, message: str, value: object = None) -> None:
        self.value = value
        super().__init__(message)


class CacheReadError(CmakeprojError, OSError):
    """Raised when a cache file cannot be read.

    Attributes:
        path: Path to the unreadable file.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        path: str,
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest configuring the build directory."""
        return f"Check that {self.path} exists and is readable, or run 'cmakeproj configure'"


class TestListError(CmakeprojError):
    """Raised when the test tool's JSON test list cannot be decoded.

    Attributes:
        cause: The underlying exception, if any.
    """

    __test__ = False

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)
