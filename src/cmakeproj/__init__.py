"""cmakeproj - Locate and describe out-of-tree CMake projects.

This library reconciles a source directory with its configured build
directory and reads typed, documented options from CMakeCache.txt.

Example:
    >>> from cmakeproj import ProjectConfig, parse_cache, resolve_project
    >>> project = resolve_project("src/lib", ProjectConfig(build_directory="build"))
    >>> options = parse_cache(project.build)
    >>> options["CMAKE_BUILD_TYPE"].value
    'Release'
"""

from cmakeproj.adapters import (
    LocalFilesystem,
    RouterFilesystem,
    SubprocessRunner,
    create_router,
)
from cmakeproj.backends import (
    BackendKind,
    CMakeBackend,
    VcsBackend,
    classify_directory,
    default_backends,
)
from cmakeproj.config import ProjectConfig, load_config
from cmakeproj.core.cache_parser import parse_cache, parse_cache_text, read_cache_file
from cmakeproj.core.commands import (
    build_command,
    configure_command,
    list_tests_command,
    parse_test_list,
    run_tests_command,
)
from cmakeproj.core.exceptions import (
    CacheReadError,
    CmakeprojError,
    ConfigurationError,
    CrossHostError,
    InconsistentConfigError,
    MalformedCacheError,
    ProjectNotFoundError,
    TestListError,
)
from cmakeproj.core.models import CacheEntry, CacheFile, CacheType, Project
from cmakeproj.core.path_utils import resolve_build_directory
from cmakeproj.core.ports import CommandRunnerPort, FilesystemPort, ProjectBackend
from cmakeproj.core.resolver import resolve_project


__version__ = "0.1.0"

__all__ = [
    "BackendKind",
    "CMakeBackend",
    "CacheEntry",
    "CacheFile",
    "CacheReadError",
    "CacheType",
    "CmakeprojError",
    "CommandRunnerPort",
    "ConfigurationError",
    "CrossHostError",
    "FilesystemPort",
    "InconsistentConfigError",
    "LocalFilesystem",
    "MalformedCacheError",
    "Project",
    "ProjectBackend",
    "ProjectConfig",
    "ProjectNotFoundError",
    "RouterFilesystem",
    "SubprocessRunner",
    "TestListError",
    "VcsBackend",
    "__version__",
    "build_command",
    "classify_directory",
    "configure_command",
    "create_router",
    "default_backends",
    "list_tests_command",
    "load_config",
    "parse_cache",
    "parse_cache_text",
    "read_cache_file",
    "resolve_build_directory",
    "resolve_project",
    "run_tests_command",
]
