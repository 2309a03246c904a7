"""
Query Execution Engine

DESIGN DECISION: Listing is a fixed pipeline over the in-memory collection:

    category filter -> since -> until -> canonical sort -> limit -> total

Dates are compared as strings. YYYY-MM-DD is fixed width, so string
order is chronological order.

The limit keeps the LAST N records of the sorted sequence, i.e. the most
recent ones, still in ascending order.
"""

from decimal import Decimal
from typing import Optional

from ledgerline.models.expense import (
    Expense,
    ListQuery,
    QueryResult,
    round_amount,
)
from ledgerline.services.storage import ExpenseStorageInterface


def filter_by_category(expenses: list[Expense], category: Optional[str]) -> list[Expense]:
    """Exact, case-insensitive category match."""
    if not category:
        return expenses
    wanted = category.lower()
    return [expense for expense in expenses if expense.category.lower() == wanted]


def filter_by_date_range(
    expenses: list[Expense],
    since: Optional[str] = None,
    until: Optional[str] = None,
) -> list[Expense]:
    """Keep records with since <= date <= until; either bound may be absent."""
    if since:
        expenses = [expense for expense in expenses if expense.date >= since]
    if until:
        expenses = [expense for expense in expenses if expense.date <= until]
    return expenses


def sort_canonical(expenses: list[Expense]) -> list[Expense]:
    """Ascending by date then createdAt. Stable for full ties."""
    return sorted(expenses, key=lambda expense: expense.sort_key)


def take_most_recent(expenses: list[Expense], limit: Optional[int]) -> list[Expense]:
    """Keep the last `limit` records of an already sorted list."""
    if not limit or limit < 1:
        return expenses
    return expenses[-limit:]


def sum_amounts(expenses: list[Expense]) -> Decimal:
    """
    Sum amounts exactly, then round half-up to cents.

    Currencies are NOT converted; mixed currencies are summed as-is.
    """
    total = sum((Decimal(str(expense.amount)) for expense in expenses), Decimal("0"))
    return round_amount(total)


class QueryExecutor:
    """
    Executes list queries against expense storage.

    GUARANTEES:
    - Only returns records that are actually stored
    - Output is always in canonical order
    - Query bounds must already be validated by the caller
    """

    def __init__(self, storage: ExpenseStorageInterface):
        self._storage = storage

    def apply(self, expenses: list[Expense], query: ListQuery) -> QueryResult:
        """Run the pipeline over an in-memory collection."""
        selected = filter_by_category(expenses, query.category)
        selected = filter_by_date_range(selected, query.since, query.until)
        selected = sort_canonical(selected)
        selected = take_most_recent(selected, query.limit)

        return QueryResult(
            expenses=selected,
            total=sum_amounts(selected),
        )

    async def execute(self, query: ListQuery) -> QueryResult:
        """Load the full collection and run the query over it."""
        expenses = await self._storage.load()
        return self.apply(expenses, query)
