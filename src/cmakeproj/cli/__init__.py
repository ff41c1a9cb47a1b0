"""CLI for cmakeproj."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from cmakeproj.cli.commands import options as _options_module  # noqa: F401
from cmakeproj.cli.commands import tests as _tests_module  # noqa: F401
from cmakeproj.cli.main import app, main


__all__ = ["app", "main"]
