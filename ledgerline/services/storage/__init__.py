"""
Storage Services Package

Provides the abstract interface and the JSON file implementation for
expense storage.
"""

from ledgerline.services.storage.interface import (
    ExpenseStorageInterface,
    StorageError,
)
from ledgerline.services.storage.json_file import (
    JsonFileExpenseStorage,
    decode_document,
    encode_document,
)

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    # Exceptions
    "StorageError",
    # JSON file implementation
    "JsonFileExpenseStorage",
    "decode_document",
    "encode_document",
]
