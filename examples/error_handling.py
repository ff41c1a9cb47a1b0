"""Error handling patterns with recovery hints.

This example demonstrates how to tell "not a CMake project" apart from
configuration mistakes, and how to use the recovery_hint property to
provide actionable guidance.
"""

from pathlib import Path

from cmakeproj import (
    BackendKind,
    CMakeBackend,
    CmakeprojError,
    CrossHostError,
    InconsistentConfigError,
    ProjectConfig,
    ProjectNotFoundError,
    VcsBackend,
    classify_directory,
    create_router,
    resolve_project,
)


config = ProjectConfig(build_directory=lambda source: source + "-build")
fs = create_router()


# Pattern 1: Not a project is recoverable, try another strategy
def classify(directory: Path) -> str:
    """Describe what kind of project a directory belongs to."""
    backends = {
        BackendKind.CMAKE: CMakeBackend(config, fs),
        BackendKind.VCS: VcsBackend(fs),
    }
    result = classify_directory(str(directory), backends)
    if result is None:
        return "no project"
    kind, root = result
    return f"{kind.value} project at {root}"


# Pattern 2: Disagreeing build directories are fatal
def resolve_strictly(directory: Path) -> None:
    """Resolve a project, reporting configuration mismatches verbatim."""
    try:
        project = resolve_project(str(directory), config, fs)
    except ProjectNotFoundError:
        print(f"{directory} is not inside a CMake project")
    except InconsistentConfigError as e:
        print(f"Stale cache in {e.discovered}, expected {e.expected}")
        print(f"Hint: {e.recovery_hint}")
    except CrossHostError as e:
        print(f"{e.source} and {e.build} are on different hosts")
        print(f"Hint: {e.recovery_hint}")
    else:
        print(f"{project.source} builds in {project.build}")


# Pattern 3: Catch everything from the library
def safe_resolve(directory: Path) -> None:
    """Resolve a project, catching any library error."""
    try:
        resolve_project(str(directory), config, fs)
    except CmakeprojError as e:
        print(f"Error: {e}")
        if e.recovery_hint:
            print(f"Hint: {e.recovery_hint}")


if __name__ == "__main__":
    here = Path.cwd()
    print(classify(here))
    resolve_strictly(here)
    safe_resolve(here)
