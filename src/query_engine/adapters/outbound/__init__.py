"""Outbound adapters.

Exports:
    - InMemoryDataSource: DataSource backed by caller-supplied tuples
    - CollectingSink: ResultSink that keeps results in memory
"""

from query_engine.adapters.outbound.collecting_sink import CollectingSink
from query_engine.adapters.outbound.in_memory_source import InMemoryDataSource

__all__ = [
    "CollectingSink",
    "InMemoryDataSource",
]
