"""Shared CLI app objects and logging setup."""

import logging
import sys
from importlib import import_module
from types import ModuleType

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="regscan",
    help="Accessibility compliance scanner for WCAG, EN 301 549 and national law",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

FACADE_MODULE = "regscan.cli"


def facade() -> ModuleType:
    """Return ``regscan.cli``, where commands look up patchable collaborators.

    Commands call ``facade().create_orchestrator()`` rather than importing the
    function, so replacing the attribute on ``regscan.cli`` takes effect.
    """
    return sys.modules.get(FACADE_MODULE) or import_module(FACADE_MODULE)


def configure_logging(verbose: bool) -> None:
    """Route library logging to stderr through rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=verbose, show_path=verbose)],
        force=True,
    )
    # Transport chatter stays at WARNING even in verbose mode
    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
