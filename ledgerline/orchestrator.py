"""
Main Orchestrator for Ledgerline

This module ties together all the components and defines the
end-to-end flows for:
1. Add (draft -> validate -> load -> append -> save)
2. List (query -> validate bounds -> load -> filter/sort/limit -> total)

DESIGN DECISION: Every command is one load -> transform -> persist-or-render
transaction. Validation always runs before the store is touched, so a
rejected add leaves the data file exactly as it was.
"""

from pathlib import Path
from typing import Optional

from ledgerline.audit import AuditLogger
from ledgerline.models.expense import (
    Expense,
    ExpenseDraft,
    ListQuery,
    QueryResult,
)
from ledgerline.queries import QueryExecutor
from ledgerline.services.storage import (
    ExpenseStorageInterface,
    JsonFileExpenseStorage,
)
from ledgerline.validation import ExpenseValidator, InputValidationError


class AddExpenseFlow:
    """
    Orchestrates the add flow.

    Flow:
    1. Validate → Build a new Expense from the (already completed) draft
    2. Load → Read the full collection
    3. Append → Add the new record at the end
    4. Save → Rewrite the full collection
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or ExpenseValidator()
        self._audit_logger = audit_logger or AuditLogger()

    async def add(self, draft: ExpenseDraft) -> Expense:
        """
        Validate and persist a new expense.

        Returns:
            The saved Expense

        Raises:
            InputValidationError: If the draft is rejected (nothing written)
        """
        try:
            expense = self._validator.build_expense(draft)
        except InputValidationError as e:
            self._audit_logger.log_validation_failed(e.issues, command="add")
            raise

        expenses = await self._storage.load()
        expenses.append(expense)
        await self._storage.save(expenses)

        self._audit_logger.log_expense_saved(expense, self._storage.location())
        return expense


class ListExpensesFlow:
    """
    Orchestrates the list flow.

    Bounds are validated before loading, so an invalid --since never
    reads the data file.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or ExpenseValidator()
        self._query_executor = QueryExecutor(storage)
        self._audit_logger = audit_logger or AuditLogger()

    async def run(self, query: ListQuery) -> QueryResult:
        """
        Execute a list query.

        Raises:
            InputValidationError: If since/until are not valid dates
        """
        try:
            self._validator.validate_query(query)
        except InputValidationError as e:
            self._audit_logger.log_validation_failed(e.issues, command="list")
            raise

        result = await self._query_executor.execute(query)

        self._audit_logger.log_query_executed(query, result.result_count)
        return result


def create_app_components(
    storage: Optional[ExpenseStorageInterface] = None,
    data_file: Optional[Path] = None,
) -> tuple[AddExpenseFlow, ListExpensesFlow, ExpenseStorageInterface]:
    """
    Factory function to create all application components.

    Args:
        storage: Storage backend to use. Defaults to the JSON file store.
        data_file: Path for the default JSON store, overriding settings.

    Returns:
        (add_flow, list_flow, storage)
    """
    audit_logger = AuditLogger()
    if storage is None:
        storage = JsonFileExpenseStorage(
            data_file=data_file,
            audit_logger=audit_logger,
        )
    validator = ExpenseValidator()

    add_flow = AddExpenseFlow(
        storage=storage,
        validator=validator,
        audit_logger=audit_logger,
    )

    list_flow = ListExpensesFlow(
        storage=storage,
        validator=validator,
        audit_logger=audit_logger,
    )

    return add_flow, list_flow, storage
