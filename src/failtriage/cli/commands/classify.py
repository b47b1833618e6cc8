"""Classify command: run one error description through the classifier."""

from __future__ import annotations

import json

import typer

from failtriage.core.errors import ErrorClassifier, normalize_error

from ..helpers import build_error_value, configure_global_logging
from ..output import console, create_classification_table, format_category


def classify(
    message: str = typer.Argument(..., help="Error message to classify"),
    name: str | None = typer.Option(None, "--name", "-n", help="Error type name, e.g. TypeError"),
    code: str | None = typer.Option(None, "--code", "-c", help="System error code, e.g. ENOENT"),
    status: int | None = typer.Option(None, "--status", "-s", help="HTTP status code"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output the result as JSON"),
) -> None:
    """Classify an error message and show its category and context."""
    configure_global_logging()

    error = build_error_value(message, name=name, code=code, status=status)
    normalized = normalize_error(error)
    result = ErrorClassifier().classify(normalized)

    if json_output:
        payload = {
            "category": result.category.value,
            "context": result.context,
            "message": normalized.message,
            "kind": normalized.kind.value,
        }
        if normalized.status_code is not None:
            payload["status_code"] = normalized.status_code
        console.print_json(json.dumps(payload))
        return

    table = create_classification_table()
    table.add_row("Category", format_category(result.category))
    table.add_row("Context", result.context)
    table.add_row("Message", normalized.message)
    table.add_row("Kind", normalized.kind.value)
    if normalized.status_code is not None:
        table.add_row("Status", str(normalized.status_code))
    console.print(table)
