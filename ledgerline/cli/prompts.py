"""
Interactive completion for the add command.

Each field is asked only if it is still missing. Currency is never asked;
left out, it falls back to the default. Prompts re-ask until
the answer is usable, so whatever comes back passes the same checks the
validator applies.
"""

import math
from typing import Optional, TextIO

from rich.console import Console
from rich.prompt import FloatPrompt, Prompt

from ledgerline.models.expense import (
    DEFAULT_CATEGORIES,
    ExpenseDraft,
    is_valid_date,
    today_iso,
)


def should_prompt(draft: ExpenseDraft, interactive: bool, stdin_is_tty: bool) -> bool:
    """
    Decide whether to run interactive completion.

    An explicit --interactive always prompts. Otherwise we only prompt for
    missing fields when someone is at the terminal to answer.
    """
    if interactive:
        return True
    return bool(draft.missing_fields()) and stdin_is_tty


def _ask_amount(console: Console, stream: Optional[TextIO]) -> float:
    while True:
        amount = FloatPrompt.ask("Amount", console=console, stream=stream)
        if math.isfinite(amount):
            return amount
        console.print("Enter a number", style="red")


def _ask_date(console: Console, stream: Optional[TextIO]) -> str:
    while True:
        value = Prompt.ask(
            "Date (YYYY-MM-DD)",
            console=console,
            default=today_iso(),
            stream=stream,
        ).strip()
        if is_valid_date(value):
            return value
        console.print("Use YYYY-MM-DD", style="red")


def resolve_missing_fields(
    draft: ExpenseDraft,
    console: Console,
    stream: Optional[TextIO] = None,
) -> ExpenseDraft:
    """
    Ask for every field the draft is missing.

    Args:
        draft: What was given on the command line
        console: Where prompts are printed
        stream: Read answers from here instead of stdin

    Returns:
        A new draft with the answers filled in
    """
    updates = {}

    if draft.amount is None or draft.amount == "":
        updates["amount"] = _ask_amount(console, stream)

    if not draft.category:
        updates["category"] = Prompt.ask(
            "Category",
            console=console,
            choices=DEFAULT_CATEGORIES,
            case_sensitive=False,
            default="Other",
            stream=stream,
        )

    if not draft.date:
        updates["date"] = _ask_date(console, stream)

    if not draft.note:
        note = Prompt.ask(
            "Note (optional)",
            console=console,
            default="",
            show_default=False,
            stream=stream,
        )
        updates["note"] = note or None

    return draft.model_copy(update=updates)
