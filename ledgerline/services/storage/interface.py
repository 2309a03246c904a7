"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the JSON file for another backend later
2. Use in-memory storage for testing
3. Keep the command flows decoupled from file handling

The interface is intentionally tiny. The whole collection is read and
written at once; there are no partial reads and no per-record updates.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from ledgerline.models.expense import Expense


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage operations.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def load(self) -> list[Expense]:
        """
        Load every stored expense.

        Returns:
            The stored expenses in insertion order. An absent or
            malformed document yields an empty list, not an error.
        """
        pass

    @abstractmethod
    async def save(self, expenses: list[Expense]) -> None:
        """
        Replace the stored collection with the given expenses.

        Args:
            expenses: The full collection, in the order to store it

        Raises:
            StorageError: If the collection cannot be written
        """
        pass

    @abstractmethod
    def location(self) -> Path:
        """
        Where the collection lives.

        Pure: derived from configuration only, no I/O.
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
