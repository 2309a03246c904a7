"""Terminal rendering for command results."""

import json
from decimal import Decimal

from rich.text import Text

from ledgerline.models.expense import Expense, QueryResult, format_amount


NO_RESULTS_MESSAGE = "No expenses found."

AMOUNT_WIDTH = 8
CATEGORY_WIDTH = 14


def expense_line(expense: Expense) -> Text:
    """One listing row: date, currency, amount, category, note."""
    return Text.assemble(
        (expense.date, "dim"),
        "  ",
        (expense.currency, "bold"),
        " ",
        format_amount(expense.amount).rjust(AMOUNT_WIDTH),
        "  ",
        (expense.category.ljust(CATEGORY_WIDTH), "cyan"),
        " ",
        expense.note or "",
    )


def total_line(total: Decimal) -> Text:
    return Text(
        f"Total: {total:.2f} (mixed currencies may be summed as-is)",
        style="dim",
    )


def saved_message(expense: Expense) -> Text:
    """Confirmation printed after a successful add."""
    message = Text.assemble(
        ("Saved expense:", "green"),
        " ",
        (expense.currency, "bold"),
        " ",
        format_amount(expense.amount),
        " ",
        (f"({expense.category} on {expense.date})", "dim"),
    )
    if expense.note:
        message.append(f" - {expense.note}")
    return message


def result_lines(result: QueryResult) -> list[Text]:
    """
    Human-readable listing.

    An empty result is a single "no results" line, never an empty table.
    """
    if not result.data_found:
        return [Text(NO_RESULTS_MESSAGE, style="yellow")]

    lines = [expense_line(expense) for expense in result.expenses]
    lines.append(Text(""))
    lines.append(total_line(result.total))
    return lines


def result_json(result: QueryResult, indent: int = 2) -> str:
    """Raw JSON of the listed expenses, same shape as the data file."""
    return json.dumps(
        [expense.to_document() for expense in result.expenses],
        indent=indent,
        ensure_ascii=False,
    )
