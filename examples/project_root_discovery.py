"""Project root discovery for out-of-tree builds.

This example resolves the source and build directories for the current
directory and lists the documented cache options of the build.

Resolution searches upward for CMakeCache.txt (a build directory) and
CMakeLists.txt (the outermost source root), then checks both agree with
the configured build-directory rule.
"""

from pathlib import Path

from cmakeproj import (
    CacheReadError,
    ProjectConfig,
    ProjectNotFoundError,
    load_config,
    parse_cache,
    resolve_project,
)


# Settings from the nearest .cmakeproj.toml, falling back to defaults
config = load_config(Path.cwd(), ProjectConfig(build_directory="build"))

try:
    project = resolve_project(str(Path.cwd()), config)
except ProjectNotFoundError as e:
    print(f"Not a CMake project: {e.start}")
    raise SystemExit(1) from None

print(f"Source directory: {project.source}")
print(f"Build directory: {project.build}")

try:
    options = parse_cache(project.build)
except CacheReadError:
    print("Not configured yet. Run 'cmakeproj configure'.")
else:
    for name, entry in sorted(options.items()):
        print(f"{name} ({entry.type.value}) = {entry.value}")
        if entry.docstring:
            print(f"    {entry.docstring}")
