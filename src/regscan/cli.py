"""regscan CLI - regulatory accessibility scanner.

This module is the public facade. Commands live in ``regscan.cli_commands`` and
look up the symbols below at call time, so tests can monkeypatch them here.
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from regscan.cli_commands import doctor_command as _doctor_command  # noqa: F401
from regscan.cli_commands import rules_command as _rules_command  # noqa: F401
from regscan.cli_commands import scan_command as _scan_command  # noqa: F401
from regscan.cli_commands.scan_helpers import create_orchestrator
from regscan.cli_commands.shared import app, configure_logging, console
from regscan.modules.report import export_pdf
from regscan.standards import StandardsDatabase
from regscan.utils.async_utils import safe_async_run, suppress_event_loop_closed_error

__all__ = [
    "StandardsDatabase",
    "app",
    "console",
    "create_orchestrator",
    "export_pdf",
    "main",
    "safe_async_run",
]


@app.command()
def version() -> None:
    """Show the installed regscan version."""
    try:
        current_version = pkg_version("regscan")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"regscan {current_version}")


def main() -> None:
    """Entry point for the CLI."""
    suppress_event_loop_closed_error()
    configure_logging(verbose=False)
    app()
