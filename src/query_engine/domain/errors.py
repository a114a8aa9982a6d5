"""Error taxonomy for query evaluation.

Every error is fatal to the single query invocation that raised it. Nothing
is retried: evaluation is pure and deterministic, so a retry would fail the
same way.
"""

from __future__ import annotations


class QueryError(Exception):
    """Base class for all query engine errors."""
    pass


class EmptyGroupError(QueryError):
    """An aggregate that needs at least one element was applied to an empty group."""

    def __init__(self, aggregate: str) -> None:
        super().__init__(f"{aggregate}() requires a non-empty group")
        self.aggregate = aggregate


class DivisionByZeroError(QueryError, ZeroDivisionError):
    """The denominator of an average summed to zero."""

    def __init__(self, numerator: object) -> None:
        super().__init__(f"average denominator is zero (numerator={numerator})")
        self.numerator = numerator


class MalformedKeyError(QueryError):
    """A join key is null, has a null field, or cannot be hashed."""

    def __init__(self, key: object, reason: str) -> None:
        super().__init__(f"Malformed join key {key!r}: {reason}")
        self.key = key
        self.reason = reason


class InvalidBucketSchemeError(QueryError, ValueError):
    """A bucket scheme has gaps, overlaps or duplicate labels."""
    pass


class UnknownQueryError(QueryError, KeyError):
    """No query is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown query '{name}'")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])
