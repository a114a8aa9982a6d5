"""
Query Engine - In-memory relational query and aggregation engine

Answers analytical questions over customers, orders, suppliers and products
by composing joins, group-joins, nested groupings, price bucketing and stable
multi-key ordering.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
