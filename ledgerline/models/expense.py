"""
Core Data Models for Ledgerline

These models define the schemas for all data flowing through the system.
They are designed to:
1. Enforce the record invariants at runtime
2. Serialize to exactly the JSON shape stored on disk
3. Keep the raw, not-yet-validated add input separate from real records

DESIGN DECISION: Dates and timestamps are kept as strings.
The fixed-width ISO forms sort lexicographically in chronological order,
and keeping the original text means a load/save cycle never rewrites them.
"""

import re
from datetime import date as date_type
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


DEFAULT_CURRENCY = "EUR"

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)

DEFAULT_CATEGORIES = [
    "Food",
    "Transport",
    "Groceries",
    "Utilities",
    "Rent",
    "Entertainment",
    "Health",
    "Shopping",
    "Travel",
    "Other",
]

_CENT = Decimal("0.01")


# =============================================================================
# HELPERS
# =============================================================================

def is_valid_date(value: str) -> bool:
    """True for a YYYY-MM-DD string naming a real calendar day."""
    if not DATE_PATTERN.match(value):
        return False
    try:
        date_type.fromisoformat(value)
    except ValueError:
        return False
    return True


def today_iso() -> str:
    """Today's date in UTC as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string ending in Z."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def round_amount(value: Union[float, Decimal]) -> Decimal:
    """
    Round to cents, half-up.

    Floats go through their shortest repr so that 10.005 rounds as the
    user typed it rather than as its binary approximation.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def format_amount(value: Union[float, Decimal]) -> str:
    """Format an amount with exactly two decimals."""
    return f"{round_amount(value):.2f}"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    One logged monetary event.

    CRITICAL: id and createdAt are required when decoding.
    Use Expense.new() to build a fresh record; it generates both.

    Stored dates only have to match YYYY-MM-DD; calendar validity is an
    input rule (see ExpenseValidator). Unknown keys are kept so that a
    rewrite of the document never drops them.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    amount: float = Field(
        ...,
        allow_inf_nan=False,
        description="Signed amount, no currency-aware precision"
    )
    currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=1,
        description="Short currency code, not checked against ISO"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Free-text category label"
    )
    date: str = Field(
        ...,
        description="Calendar date as YYYY-MM-DD"
    )
    note: Optional[str] = Field(
        default=None,
        description="Optional free-text note"
    )
    created_at: str = Field(
        ...,
        alias="createdAt",
        min_length=1,
        description="ISO-8601 UTC creation timestamp"
    )

    @field_validator('date')
    @classmethod
    def validate_date(cls, v: str) -> str:
        """Dates must have the YYYY-MM-DD shape."""
        if not DATE_PATTERN.match(v):
            raise ValueError(f"Date must be in YYYY-MM-DD, got {v!r}")
        return v

    @classmethod
    def new(
        cls,
        amount: float,
        category: str,
        date: str,
        currency: str = DEFAULT_CURRENCY,
        note: Optional[str] = None,
    ) -> "Expense":
        """Create a record with a fresh id and creation timestamp."""
        return cls(
            id=str(uuid4()),
            amount=amount,
            currency=currency,
            category=category,
            date=date,
            note=note,
            created_at=utc_timestamp(),
        )

    @property
    def sort_key(self) -> tuple[str, str]:
        """Canonical order: date, then creation time."""
        return (self.date, self.created_at)

    def to_document(self) -> dict:
        """Convert to the JSON object stored on disk."""
        document = self.model_dump(by_alias=True, exclude_none=True)
        # Unknown keys go back exactly as read, nulls included
        document.update(self.model_extra or {})
        return document


# =============================================================================
# INPUT MODELS
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    Add-command input before validation.

    Every field may still be missing. Amount may be raw text from the
    command line; the validator decides whether it is a number.
    """

    amount: Optional[Union[float, str]] = None
    category: Optional[str] = None
    date: Optional[str] = None
    note: Optional[str] = None
    currency: Optional[str] = None

    def missing_fields(self) -> list[str]:
        """Names of the fields that interactive completion should ask for."""
        missing = []
        if self.amount is None or self.amount == "":
            missing.append("amount")
        if not self.category:
            missing.append("category")
        if not self.date:
            missing.append("date")
        return missing


class ListQuery(BaseModel):
    """Filters and output options for the list command."""

    category: Optional[str] = None
    since: Optional[str] = None
    until: Optional[str] = None
    limit: Optional[int] = Field(
        default=None,
        ge=1,
        description="Keep only the most recent N records"
    )
    as_json: bool = False


class QueryResult(BaseModel):
    """
    Result of executing a list query.

    Expenses are already in canonical order and limited.
    """

    expenses: list[Expense] = Field(default_factory=list)
    total: Decimal = Field(
        default=Decimal("0.00"),
        description="Sum of amounts, rounded half-up to cents"
    )

    @property
    def result_count(self) -> int:
        return len(self.expenses)

    @property
    def data_found(self) -> bool:
        return len(self.expenses) > 0


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
