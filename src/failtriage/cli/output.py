"""Rich output formatting for the failtriage CLI.

Centralizes the shared console, category colors and table builders so every
command renders the same way.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from failtriage.core.errors import WARN_CATEGORIES, ErrorCategory

# Shared console instance; commands print through this one
console = Console()


def category_style(category: ErrorCategory) -> str:
    """Get the color a category is shown in, following its log level."""
    if category is ErrorCategory.UNKNOWN:
        return "dim"
    if category in WARN_CATEGORIES:
        return "yellow"
    return "red"


def format_category(category: ErrorCategory) -> str:
    """Format a category value with its color markup."""
    style = category_style(category)
    return f"[{style}]{category.value}[/{style}]"


def create_classification_table() -> Table:
    """Create a two-column table for a single classification result.

    Returns:
        Rich Table configured for field/value display.
    """
    table = Table(title="Classification", show_header=False)
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    return table


def create_categories_table() -> Table:
    """Create a styled table for the category listing.

    Returns:
        Rich Table configured for category display.
    """
    table = Table(title="Error Categories")
    table.add_column("Category", no_wrap=True)
    table.add_column("Patterns", justify="right", style="cyan")
    table.add_column("HTTP Status", justify="right", style="dim")
    return table


def create_pattern_groups_table() -> Table:
    """Create a styled table for pattern groups in priority order.

    Returns:
        Rich Table configured for pattern group display.
    """
    table = Table(title="Pattern Groups (priority order)")
    table.add_column("#", justify="right", style="cyan", width=4)
    table.add_column("Category", no_wrap=True)
    table.add_column("Context")
    table.add_column("Patterns", justify="right", style="dim")
    return table


def create_simple_table(show_header: bool = False) -> Table:
    """Create a simple key-value table.

    Args:
        show_header: Whether to show column headers.

    Returns:
        Rich Table with minimal styling.
    """
    table = Table(show_header=show_header, box=None)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    return table


__all__ = [
    "console",
    "category_style",
    "format_category",
    "create_classification_table",
    "create_categories_table",
    "create_pattern_groups_table",
    "create_simple_table",
]
