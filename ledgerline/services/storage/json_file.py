"""
JSON File Storage Implementation

DESIGN DECISION: A single local JSON document holds every expense because:
1. Users can open and read their data in any editor
2. No database setup required
3. The collection is small enough to load entirely on every command

TRADEOFFS:
- No locking: two concurrent invocations race and the last writer wins
- Every save rewrites the whole file

Reads accept two shapes, tried in order:
1. a bare JSON array of expenses (what we write)
2. an object with an "expenses" array (older files)
Anything else is treated as an empty ledger.

Entries inside an accepted document that do not decode as an Expense are
left out of the loaded list but kept in place: the next save writes them
back exactly as they were read. The ledger only grows.
"""

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from ledgerline.audit import AuditLogger
from ledgerline.config import get_settings
from ledgerline.models.expense import Expense
from ledgerline.services.storage.interface import (
    ExpenseStorageInterface,
    StorageError,
)


LEGACY_COLLECTION_KEY = "expenses"


def decode_document(parsed: Any) -> Optional[list]:
    """
    Pick the list of raw expense entries out of a parsed document.

    Returns None when the document has neither accepted shape.
    """
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict) and isinstance(parsed.get(LEGACY_COLLECTION_KEY), list):
        return parsed[LEGACY_COLLECTION_KEY]
    return None


def encode_document(
    expenses: list[Expense],
    indent: int = 2,
    unreadable: Optional[list[tuple[int, Any]]] = None,
) -> str:
    """
    Serialize expenses as the bare array written to disk.

    Args:
        expenses: Records to write, in order
        indent: JSON indentation
        unreadable: (position, raw entry) pairs to put back where they were
    """
    entries: list[Any] = [expense.to_document() for expense in expenses]
    for position, raw in sorted(unreadable or [], key=lambda item: item[0]):
        entries.insert(min(position, len(entries)), raw)

    return json.dumps(
        entries,
        indent=indent,
        ensure_ascii=False,
    ) + "\n"


class JsonFileExpenseStorage(ExpenseStorageInterface):
    """
    Expense storage backed by one JSON file.

    The file and its directory are only created on the first save.
    """

    def __init__(
        self,
        data_file: Optional[Path] = None,
        indent: Optional[int] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the store.

        Args:
            data_file: Path of the JSON document. Defaults to the
                       configured location under the home directory.
            indent: JSON indentation used on save. Defaults to settings.
            audit_logger: Where load/save diagnostics go.
        """
        settings = get_settings().app
        self._data_file = Path(data_file) if data_file else settings.data_file_path
        self._indent = settings.json_indent if indent is None else indent
        self._audit_logger = audit_logger or AuditLogger()
        # Entries from the last load that did not decode, by position
        self._unreadable: list[tuple[int, Any]] = []

    def location(self) -> Path:
        return self._data_file

    async def load(self) -> list[Expense]:
        path = self.location()
        self._unreadable = []

        if not path.exists():
            self._audit_logger.log_store_recovered(path, "missing")
            return []

        raw = path.read_bytes()
        try:
            parsed = json.loads(raw)
        except ValueError as e:
            # Covers both invalid JSON and undecodable bytes
            self._audit_logger.log_store_recovered(path, f"unparseable: {e}")
            return []

        entries = decode_document(parsed)
        if entries is None:
            self._audit_logger.log_store_recovered(path, "unexpected_shape")
            return []

        expenses = []
        for index, entry in enumerate(entries):
            try:
                expenses.append(Expense.model_validate(entry))
            except ValidationError as e:
                self._unreadable.append((index, entry))
                self._audit_logger.log_record_skipped(path, index, str(e))

        self._audit_logger.log_store_loaded(path, len(expenses))
        return expenses

    async def save(self, expenses: list[Expense]) -> None:
        path = self.location()
        document = encode_document(
            expenses,
            indent=self._indent,
            unreadable=self._unreadable,
        )

        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            # Write beside the target then rename, so readers never see a
            # half-written document.
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(document)
                os.replace(tmp_name, path)
            except BaseException:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Could not write expenses to {path}: {e}") from e
