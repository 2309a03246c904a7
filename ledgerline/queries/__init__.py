"""Query execution package."""

from ledgerline.queries.executor import QueryExecutor

__all__ = ["QueryExecutor"]
