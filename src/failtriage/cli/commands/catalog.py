"""Catalog commands: list categories and the pattern registry."""

from __future__ import annotations

from collections import Counter

import typer
from rich.markup import escape

from failtriage.core.errors import (
    ErrorCategory,
    find_pattern_group,
    iter_pattern_groups,
    map_category_to_status_code,
)

from ..helpers import configure_global_logging, resolve_category
from ..output import (
    console,
    create_categories_table,
    create_pattern_groups_table,
    create_simple_table,
    format_category,
)


def categories() -> None:
    """List every error category with its pattern groups and HTTP status."""
    configure_global_logging()

    group_counts = Counter(group.category for group in iter_pattern_groups())
    table = create_categories_table()
    for category in ErrorCategory:
        table.add_row(
            format_category(category),
            str(group_counts.get(category, 0)),
            str(map_category_to_status_code(category)),
        )
    console.print(table)
    console.print(f"\n[dim]{len(ErrorCategory)} categories[/dim]")


def patterns(
    category: str | None = typer.Argument(
        None,
        help="Show the regex sources of one category (name or value)",
    ),
) -> None:
    """Show pattern groups in priority order, or one group's patterns."""
    configure_global_logging()

    if category is None:
        table = create_pattern_groups_table()
        for index, group in enumerate(iter_pattern_groups(), start=1):
            table.add_row(
                str(index),
                format_category(group.category),
                group.context,
                str(len(group.patterns)),
            )
        console.print(table)
        return

    resolved = resolve_category(category)
    if resolved is None:
        console.print(f"[red]Unknown category:[/red] {escape(category)}")
        raise typer.Exit(1)

    group = find_pattern_group(resolved)
    if group is None:
        console.print(f"[yellow]No pattern group for {resolved.value}[/yellow]")
        console.print("[dim]It is assigned by type, code or status lookups only.[/dim]")
        return

    console.print(f"[bold]{format_category(group.category)}[/bold] - {group.context}")
    table = create_simple_table()
    for index, source in enumerate(group.patterns, start=1):
        table.add_row(str(index), escape(source))
    console.print(table)
