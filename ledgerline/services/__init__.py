"""Services package."""

from ledgerline.services.storage import (
    ExpenseStorageInterface,
    JsonFileExpenseStorage,
    StorageError,
)

__all__ = [
    # Storage services
    "ExpenseStorageInterface",
    "JsonFileExpenseStorage",
    "StorageError",
]
