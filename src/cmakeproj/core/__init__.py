"""Core domain module for cmakeproj.

This module contains pure Python domain models, port definitions and the
resolution and parsing algorithms. Filesystem access goes through
FilesystemPort, so it can be tested in isolation.
"""

from cmakeproj.core.cache_parser import parse_cache, parse_cache_text, read_cache_file
from cmakeproj.core.models import CacheEntry, CacheFile, CacheType, Project
from cmakeproj.core.path_utils import resolve_build_directory
from cmakeproj.core.ports import CommandRunnerPort, FilesystemPort, ProjectBackend
from cmakeproj.core.resolver import resolve_project


__all__ = [
    "CacheEntry",
    "CacheFile",
    "CacheType",
    "CommandRunnerPort",
    "FilesystemPort",
    "Project",
    "ProjectBackend",
    "parse_cache",
    "parse_cache_text",
    "read_cache_file",
    "resolve_build_directory",
    "resolve_project",
]
