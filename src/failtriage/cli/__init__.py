"""failtriage CLI.

Built with Typer. Global options are handled by the app callback, commands
live in the commands package and render through the shared Rich console.
"""

from __future__ import annotations

from typing import Annotated

import typer

from failtriage import __version__

from .commands import categories, check_config, classify, patterns
from .helpers import configure_global_logging, set_log_format, set_log_level
from .output import console

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS = ("json", "console")

app = typer.Typer(
    name="failtriage",
    help="Classify and triage test-suite failures",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"failtriage v{__version__}")
        raise typer.Exit()


def log_level_callback(value: str | None) -> str | None:
    if value:
        if value.upper() not in LOG_LEVELS:
            raise typer.BadParameter(f"must be one of {', '.join(LOG_LEVELS)}")
        set_log_level(value)
    return value


def log_format_callback(value: str | None) -> str | None:
    if value:
        if value.lower() not in LOG_FORMATS:
            raise typer.BadParameter(f"must be one of {', '.join(LOG_FORMATS)}")
        set_log_format(value)
    return value


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-L",
            callback=log_level_callback,
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            envvar="FAILTRIAGE_LOG_LEVEL",
        ),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            callback=log_format_callback,
            help="Log format: json or console",
            envvar="FAILTRIAGE_LOG_FORMAT",
        ),
    ] = None,
) -> None:
    """failtriage - classify and triage test-suite failures."""
    configure_global_logging()


app.command()(classify)
app.command()(categories)
app.command()(patterns)
app.command(name="check-config")(check_config)

__all__ = ["app", "main"]
