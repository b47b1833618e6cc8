"""check-config command: validate a failtriage YAML configuration file."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from failtriage.core.config import TriageConfig
from failtriage.core.errors import ConfigError

from ..helpers import configure_global_logging
from ..output import console, create_simple_table


def check_config(
    config_file: Path = typer.Argument(..., help="Path to YAML configuration file"),
) -> None:
    """Validate a configuration file and summarize it.

    Exit codes:
      0: Valid
      1: Unreadable or invalid
    """
    configure_global_logging()

    try:
        config = TriageConfig.from_yaml(config_file)
    except ConfigError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    console.print(f"[green]✓[/green] {escape(str(config_file))} is valid")
    table = create_simple_table()
    table.add_row("Environment", config.environment)
    table.add_row("Version", config.version or "-")
    table.add_row("Log level", config.logging.level)
    table.add_row("Log format", config.logging.format)
    table.add_row("Pattern cache", str(config.cache.pattern_cache_size))
    table.add_row("Match cache", str(config.cache.match_cache_size))
    table.add_row("Negative tests", str(len(config.negative_tests)))
    console.print(table)
