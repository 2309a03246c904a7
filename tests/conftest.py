"""
Shared fixtures for Ledgerline tests.

Test strategy:
1. Unit tests for models, validator and query pipeline (no disk)
2. Storage tests against a temporary directory
3. CLI tests through main(argv), with HOME and the data dir redirected
"""

import logging
from pathlib import Path
from typing import Optional

import pytest

from ledgerline.config import get_settings
from ledgerline.models import Expense
from ledgerline.services.storage import ExpenseStorageInterface


class InMemoryExpenseStorage(ExpenseStorageInterface):
    """Storage double that keeps the collection in a list."""

    def __init__(self, expenses: Optional[list[Expense]] = None):
        self.expenses = list(expenses or [])
        self.save_count = 0

    async def load(self) -> list[Expense]:
        return list(self.expenses)

    async def save(self, expenses: list[Expense]) -> None:
        self.expenses = list(expenses)
        self.save_count += 1

    def location(self) -> Path:
        return Path("/in-memory/expenses.json")


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep every test away from the real home directory and .env files."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("LEDGERLINE_DATA_DIR", raising=False)
    monkeypatch.delenv("LEDGERLINE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LEDGERLINE_JSON_INDENT", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield home
    get_settings.cache_clear()
    package_logger = logging.getLogger("ledgerline")
    package_logger.handlers = []
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def data_dir(tmp_path, monkeypatch) -> Path:
    """Point LEDGERLINE_DATA_DIR at a fresh directory."""
    directory = tmp_path / "data"
    monkeypatch.setenv("LEDGERLINE_DATA_DIR", str(directory))
    get_settings.cache_clear()
    return directory


@pytest.fixture
def data_file(data_dir) -> Path:
    return data_dir / "expenses.json"


@pytest.fixture
def make_expense():
    """Factory for valid expenses with predictable ids and timestamps."""
    counter = {"n": 0}

    def _make(
        date: str = "2025-08-01",
        amount: float = 10.0,
        category: str = "Food",
        currency: str = "EUR",
        note: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> Expense:
        counter["n"] += 1
        n = counter["n"]
        return Expense(
            id=f"exp-{n}",
            amount=amount,
            currency=currency,
            category=category,
            date=date,
            note=note,
            created_at=created_at or f"2025-08-01T00:00:{n:02d}.000000Z",
        )

    return _make


@pytest.fixture
def memory_storage() -> InMemoryExpenseStorage:
    return InMemoryExpenseStorage()
