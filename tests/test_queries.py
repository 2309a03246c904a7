"""Tests for the list query pipeline."""

import asyncio
from decimal import Decimal

from ledgerline.models import ListQuery
from ledgerline.queries import QueryExecutor
from ledgerline.queries.executor import (
    filter_by_category,
    filter_by_date_range,
    sort_canonical,
    sum_amounts,
    take_most_recent,
)
from tests.conftest import InMemoryExpenseStorage


class TestFilters:
    """Tests for the individual pipeline steps."""

    def test_category_is_case_insensitive_exact_match(self, make_expense):
        """Test Food matches food but not Fast Food."""
        expenses = [
            make_expense(category="Food"),
            make_expense(category="food"),
            make_expense(category="Transport"),
            make_expense(category="Fast Food"),
        ]
        assert len(filter_by_category(expenses, "Food")) == 2

    def test_empty_category_filter_keeps_all(self, make_expense):
        expenses = [make_expense(), make_expense(category="Rent")]
        assert filter_by_category(expenses, "") == expenses

    def test_date_bounds_inclusive(self, make_expense):
        expenses = [
            make_expense(date="2025-08-01"),
            make_expense(date="2025-08-15"),
            make_expense(date="2025-09-01"),
        ]
        kept = filter_by_date_range(expenses, since="2025-08-10", until="2025-08-31")
        assert [e.date for e in kept] == ["2025-08-15"]

        kept = filter_by_date_range(expenses, since="2025-08-15", until="2025-09-01")
        assert [e.date for e in kept] == ["2025-08-15", "2025-09-01"]

    def test_sort_by_date_then_created_at(self, make_expense):
        late = make_expense(date="2025-08-02", created_at="2025-08-02T09:00:00.000000Z")
        early_second = make_expense(date="2025-08-01", created_at="2025-08-01T12:00:00.000000Z")
        early_first = make_expense(date="2025-08-01", created_at="2025-08-01T08:00:00.000000Z")

        assert sort_canonical([late, early_second, early_first]) == [early_first, early_second, late]

    def test_sort_is_stable_on_full_ties(self, make_expense):
        stamp = "2025-08-01T08:00:00.000000Z"
        first = make_expense(created_at=stamp)
        second = make_expense(created_at=stamp)
        assert sort_canonical([first, second]) == [first, second]

    def test_limit_keeps_most_recent(self, make_expense):
        expenses = [make_expense(date=d) for d in ["2025-08-01", "2025-08-02", "2025-08-03"]]
        assert [e.date for e in take_most_recent(expenses, 2)] == ["2025-08-02", "2025-08-03"]

    def test_limit_larger_than_collection(self, make_expense):
        expenses = [make_expense()]
        assert take_most_recent(expenses, 5) == expenses

    def test_sum_rounds_half_up(self, make_expense):
        """Test [10.005, 2.00] totals 12.01."""
        expenses = [make_expense(amount=10.005), make_expense(amount=2.00)]
        assert sum_amounts(expenses) == Decimal("12.01")

    def test_sum_avoids_float_drift(self, make_expense):
        expenses = [make_expense(amount=0.1) for _ in range(3)]
        assert sum_amounts(expenses) == Decimal("0.30")

    def test_sum_mixed_currencies_as_is(self, make_expense):
        expenses = [make_expense(amount=5, currency="EUR"), make_expense(amount=5, currency="USD")]
        assert sum_amounts(expenses) == Decimal("10.00")


class TestQueryExecutor:
    """Tests for the full pipeline."""

    def test_sort_then_limit(self, make_expense):
        """Test unsorted input, limit 2 returns the two most recent ascending."""
        storage = InMemoryExpenseStorage([
            make_expense(date="2025-08-03"),
            make_expense(date="2025-08-01"),
            make_expense(date="2025-08-02"),
        ])

        result = asyncio.run(QueryExecutor(storage).execute(ListQuery(limit=2)))

        assert [e.date for e in result.expenses] == ["2025-08-02", "2025-08-03"]

    def test_filters_combine(self, make_expense):
        storage = InMemoryExpenseStorage([
            make_expense(date="2025-08-05", category="Food", amount=4),
            make_expense(date="2025-08-06", category="FOOD", amount=6),
            make_expense(date="2025-08-07", category="Rent", amount=500),
            make_expense(date="2025-07-30", category="food", amount=1),
        ])
        query = ListQuery(category="food", since="2025-08-01")

        result = asyncio.run(QueryExecutor(storage).execute(query))

        assert result.result_count == 2
        assert result.total == Decimal("10.00")

    def test_total_covers_limited_set(self, make_expense):
        executor = QueryExecutor(InMemoryExpenseStorage())
        expenses = [
            make_expense(date="2025-08-01", amount=100),
            make_expense(date="2025-08-02", amount=1),
        ]
        result = executor.apply(expenses, ListQuery(limit=1))
        assert result.total == Decimal("1.00")

    def test_no_matches(self, make_expense):
        storage = InMemoryExpenseStorage([make_expense(category="Rent")])

        result = asyncio.run(QueryExecutor(storage).execute(ListQuery(category="Food")))

        assert result.data_found is False
        assert result.total == Decimal("0.00")
