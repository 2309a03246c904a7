"""
Data Models Package

This package contains all Pydantic models used in Ledgerline.
All data flowing through the system must conform to these schemas.
"""

from ledgerline.models.expense import (
    DATE_PATTERN,
    DEFAULT_CATEGORIES,
    DEFAULT_CURRENCY,
    Expense,
    ExpenseDraft,
    ListQuery,
    QueryResult,
    ValidationIssue,
    format_amount,
    is_valid_date,
    round_amount,
    today_iso,
    utc_timestamp,
)

__all__ = [
    # Constants
    "DATE_PATTERN",
    "DEFAULT_CATEGORIES",
    "DEFAULT_CURRENCY",
    # Models
    "Expense",
    "ExpenseDraft",
    "ListQuery",
    "QueryResult",
    "ValidationIssue",
    # Helpers
    "format_amount",
    "is_valid_date",
    "round_amount",
    "today_iso",
    "utc_timestamp",
]
