"""Configuration utilities for cmakeproj.

Settings are layered: a ``.cmakeproj.toml`` file in the directory (or the
nearest ancestor holding one) overrides the process-wide defaults. The
lookup happens once at the call boundary and the resulting ProjectConfig
is passed explicitly to the resolver and command builders.
"""

from __future__ import annotations

import dataclasses
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cmakeproj.core.exceptions import ConfigurationError
from cmakeproj.core.path_utils import BuildDirectoryRule


logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".cmakeproj.toml"


@dataclass(frozen=True)
class ProjectConfig:
    """Settings consumed by project resolution and command construction.

    Attributes:
        configure_program: Configure tool, as a command name or path.
        build_program: Tool used for ``--build``. Defaults to configure_program.
        test_program: Test tool, as a command name or path.
        initial_cache: NAME:TYPE=VALUE assignments applied on first configure.
        build_directory: Literal path (relative to the source directory or
            absolute) or a function mapping the source directory to a path.
        test_args: Arguments always passed to the test tool.

    Example:
        >>> config = ProjectConfig(build_directory="out/debug")
        >>> config.test_program
        'ctest'
    """

    configure_program: str = "cmake"
    build_program: str | None = None
    test_program: str = "ctest"
    initial_cache: tuple[str, ...] = ()
    build_directory: BuildDirectoryRule = "build"
    test_args: tuple[str, ...] = ()


# TOML key -> (field name, expected kind)
_FILE_KEYS: dict[str, tuple[str, str]] = {
    "configure-program": ("configure_program", "str"),
    "build-program": ("build_program", "str"),
    "test-program": ("test_program", "str"),
    "initial-cache": ("initial_cache", "list"),
    "build-directory": ("build_directory", "str"),
    "test-args": ("test_args", "list"),
}


def find_config_file(start: Path | None = None) -> Path | None:
    """Find the nearest .cmakeproj.toml at or above start.

    Args:
        start: Directory to start searching from. If None, uses current directory.

    Returns:
        Path to the config file, or None if there is none.
    """
    if start is None:
        start = Path.cwd()

    current = start.resolve()
    for parent in [current, *current.parents]:
        candidate = parent / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def _convert(key: str, kind: str, value: Any, path: Path) -> Any:
    if kind == "str":
        if not isinstance(value, str):
            raise ConfigurationError(
                f"'{key}' in {path} must be a string, got {value!r}", value=value
            )
        return value
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(
            f"'{key}' in {path} must be a list of strings, got {value!r}",
            value=value,
        )
    return tuple(value)


def load_config_file(path: Path, defaults: ProjectConfig) -> ProjectConfig:
    """Apply the settings of one config file on top of defaults.

    Raises:
        ConfigurationError: If the file is unreadable, is not valid TOML,
            or contains unknown keys or values of the wrong type.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

    overrides: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _FILE_KEYS:
            raise ConfigurationError(
                f"Unknown setting '{key}' in {path}. "
                f"Known settings: {', '.join(sorted(_FILE_KEYS))}",
                value=key,
            )
        field_name, kind = _FILE_KEYS[key]
        overrides[field_name] = _convert(key, kind, value, path)

    logger.debug("Loaded %s: %s", path, sorted(overrides))
    return dataclasses.replace(defaults, **overrides)


def load_config(
    directory: Path | None = None, defaults: ProjectConfig | None = None
) -> ProjectConfig:
    """Resolve the effective settings for a directory.

    Args:
        directory: Directory whose settings are wanted. If None, uses
            current directory.
        defaults: Process-wide settings. If None, uses ProjectConfig().

    Returns:
        defaults overridden by the nearest .cmakeproj.toml, if any.
    """
    if defaults is None:
        defaults = ProjectConfig()

    path = find_config_file(directory)
    if path is None:
        return defaults
    return load_config_file(path, defaults)
