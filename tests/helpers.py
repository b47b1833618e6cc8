"""Shared test helpers for failtriage tests."""

from unittest.mock import MagicMock


def logged_events(logger: MagicMock, level: str) -> list[str]:
    """Event names passed to one level method of a mock logger, in call order."""
    return [c.args[0] for c in getattr(logger, level).call_args_list]
