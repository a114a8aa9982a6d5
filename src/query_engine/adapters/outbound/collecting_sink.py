"""Result sink that keeps every result in memory."""

from __future__ import annotations

from query_engine.application.results import QueryResult


class CollectingSink:
    """Collects query results in arrival order.

    Useful for tests and for callers that render results themselves.
    """

    def __init__(self) -> None:
        self._results: list[QueryResult] = []

    def write(self, result: QueryResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> list[QueryResult]:
        return list(self._results)

    def get(self, name: str) -> QueryResult | None:
        """Most recent result for a query name."""
        for result in reversed(self._results):
            if result.name == name:
                return result
        return None

    def __len__(self) -> int:
        return len(self._results)

    def clear(self) -> None:
        self._results.clear()
