"""Count Queries - Bounded-memory frequency count of lines in large files."""

from count_queries.solver.solve import CountOptions, count_queries

__all__ = ["CountOptions", "count_queries"]
