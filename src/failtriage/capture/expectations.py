"""Negative-test expectation table.

Maps test names (or fnmatch patterns) to the HTTP statuses an intentionally
failing test is expected to produce, so expected failures can be told apart
from genuine regressions.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from fnmatch import fnmatchcase

from failtriage.core.config import NegativeTestExpectation


class NegativeTestExpectations:
    """Lookup over NegativeTestExpectation entries.

    A test matches an entry when its name equals the entry's ``test`` or
    matches it as an fnmatch pattern. Statuses of all matching entries are
    combined.
    """

    def __init__(self, entries: Iterable[NegativeTestExpectation] = ()) -> None:
        self._entries: tuple[NegativeTestExpectation, ...] = tuple(entries)

    @classmethod
    def from_mapping(cls, table: Mapping[str, Iterable[int]]) -> NegativeTestExpectations:
        """Build from a plain {test_pattern: [statuses]} mapping."""
        return cls(
            NegativeTestExpectation(test=test, statuses=list(statuses))
            for test, statuses in table.items()
        )

    def __len__(self) -> int:
        return len(self._entries)

    def _matching(self, test_name: str) -> list[NegativeTestExpectation]:
        return [
            entry for entry in self._entries
            if entry.test == test_name or fnmatchcase(test_name, entry.test)
        ]

    def is_negative_test(self, test_name: str | None) -> bool:
        if not test_name:
            return False
        return bool(self._matching(test_name))

    def expected_statuses(self, test_name: str | None) -> frozenset[int]:
        if not test_name:
            return frozenset()
        return frozenset(
            status for entry in self._matching(test_name) for status in entry.statuses
        )

    def is_expected_status(self, test_name: str | None, status_code: int | None) -> bool:
        """Check whether a status is an expected outcome for a test."""
        if status_code is None:
            return False
        return status_code in self.expected_statuses(test_name)
