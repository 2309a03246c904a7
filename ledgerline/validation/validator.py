"""
Input Validation

DESIGN DECISION: Validation happens before anything is written.
An add either produces a complete, valid Expense or raises
InputValidationError; there is no partially-saved state.

Rules for a new expense, in order:
1. amount must be present and a finite number
2. category must be present and non-empty
3. date defaults to today (UTC); if given it must be YYYY-MM-DD and a real day

The same date rule guards the since/until bounds of a list query.

IMPORTANT: Validation NEVER guesses. Bad input is reported, not repaired.
"""

import math
from typing import Optional, Union

from ledgerline.models.expense import (
    DEFAULT_CURRENCY,
    Expense,
    ExpenseDraft,
    ListQuery,
    ValidationIssue,
    is_valid_date,
    today_iso,
)


class InputValidationError(Exception):
    """User input was rejected; nothing has been written."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        super().__init__("; ".join(issue.message for issue in issues))


def parse_amount(value: Union[float, str, None]) -> Optional[float]:
    """
    Convert an amount to a finite float.

    Returns None for missing, unparseable, infinite or NaN values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    amount = float(value)
    if not math.isfinite(amount):
        return None
    return amount


def _clean_text(value: Optional[str]) -> Optional[str]:
    """Strip whitespace; empty becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class ExpenseValidator:
    """
    Validates add and list input.

    Stateless; kept as a class so flows can be given a different
    validator in tests.
    """

    def _validate_draft(
        self,
        draft: ExpenseDraft,
    ) -> tuple[Optional[float], Optional[str], str, list[ValidationIssue]]:
        """
        Check the draft fields in rule order.

        Returns: (amount, category, date, list_of_issues)
        """
        issues = []

        amount = parse_amount(draft.amount)
        if amount is None:
            if draft.amount is None or (isinstance(draft.amount, str) and not draft.amount.strip()):
                message = "Amount is required. Use --amount or run with --interactive."
                issue_type = "missing"
            else:
                message = f"Amount must be a finite number, got {draft.amount!r}."
                issue_type = "invalid_value"
            issues.append(ValidationIssue(
                field="amount",
                issue_type=issue_type,
                message=message,
            ))

        category = _clean_text(draft.category)
        if category is None:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required. Use --category or run with --interactive.",
            ))

        date = _clean_text(draft.date)
        if date is None:
            date = today_iso()
        elif not is_valid_date(date):
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message="Date must be in YYYY-MM-DD",
            ))

        return amount, category, date, issues

    def build_expense(self, draft: ExpenseDraft) -> Expense:
        """
        Turn a draft into a new Expense.

        Raises:
            InputValidationError: If any rule fails
        """
        amount, category, date, issues = self._validate_draft(draft)
        if issues:
            raise InputValidationError(issues)

        return Expense.new(
            amount=amount,
            category=category,
            date=date,
            currency=_clean_text(draft.currency) or DEFAULT_CURRENCY,
            note=_clean_text(draft.note),
        )

    def validate_query(self, query: ListQuery) -> None:
        """
        Check the date bounds of a list query.

        Empty bounds count as absent.

        Raises:
            InputValidationError: If since or until is not a valid date
        """
        issues = []
        for name in ("since", "until"):
            value = getattr(query, name)
            if value and not is_valid_date(value):
                issues.append(ValidationIssue(
                    field=name,
                    issue_type="invalid_format",
                    message=f"{name} must be YYYY-MM-DD",
                ))
        if issues:
            raise InputValidationError(issues)
