"""Validation package."""

from ledgerline.validation.validator import (
    ExpenseValidator,
    InputValidationError,
    parse_amount,
)

__all__ = ["ExpenseValidator", "InputValidationError", "parse_amount"]
