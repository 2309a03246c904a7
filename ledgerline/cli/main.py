"""
Command-line entry point for Ledgerline

This is the surface users interact with:

    ledgerline add  [-a N] [-c C] [-d YYYY-MM-DD] [-n NOTE] [--currency CUR] [-i]
    ledgerline list [-c C] [--since DATE] [--until DATE] [-l N] [--json]
    ledgerline path

Exit codes:
    0  success
    1  rejected input (missing amount/category, malformed date)
    2  bad command-line usage (argparse)

Storage errors are not caught here; they end the process with a traceback.
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from ledgerline import __version__
from ledgerline.audit import configure_logging
from ledgerline.cli.prompts import resolve_missing_fields, should_prompt
from ledgerline.cli.render import result_json, result_lines, saved_message
from ledgerline.config import get_settings
from ledgerline.models.expense import DEFAULT_CURRENCY, ExpenseDraft, ListQuery
from ledgerline.orchestrator import create_app_components
from ledgerline.validation import InputValidationError


console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


HELP_EPILOG = f"""
List filters (for 'list' command):
  -c, --category <category>  Filter by category
  --since <YYYY-MM-DD>       Start date inclusive
  --until <YYYY-MM-DD>       End date inclusive
  -l, --limit <n>            Keep only the n most recent results
  --json                     Output raw JSON

Examples:
  ledgerline add
  ledgerline add --amount 12.5 --category Food --date 2025-08-07 --note "Lunch"
  ledgerline list --category Food --since 2025-08-01 --until 2025-08-31

Default currency is {DEFAULT_CURRENCY}.
"""


def positive_int(value: str) -> int:
    """argparse type for --limit."""
    try:
        number = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def stdin_is_tty() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


def report_validation_error(error: InputValidationError) -> int:
    for issue in error.issues:
        err_console.print(Text(issue.message, style="red"), soft_wrap=True)
    return 1


def cmd_add(args: argparse.Namespace) -> int:
    """Add a new expense."""
    draft = ExpenseDraft(
        amount=args.amount,
        category=args.category,
        date=args.date,
        note=args.note,
        currency=args.currency,
    )

    if should_prompt(draft, args.interactive, stdin_is_tty()):
        try:
            draft = resolve_missing_fields(draft, console)
        except (EOFError, KeyboardInterrupt):
            # No more answers: validate what was given on the command line
            console.print()

    add_flow, _, storage = create_app_components()

    try:
        expense = asyncio.run(add_flow.add(draft))
    except InputValidationError as e:
        return report_validation_error(e)

    console.print(saved_message(expense), soft_wrap=True)
    console.print(Text(f"Data file: {storage.location()}", style="dim"), soft_wrap=True)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List expenses."""
    query = ListQuery(
        category=args.category,
        since=args.since,
        until=args.until,
        limit=args.limit,
        as_json=args.as_json,
    )

    _, list_flow, _ = create_app_components()

    try:
        result = asyncio.run(list_flow.run(query))
    except InputValidationError as e:
        return report_validation_error(e)

    if query.as_json:
        console.out(
            result_json(result, indent=get_settings().app.json_indent),
            highlight=False,
        )
        return 0

    for line in result_lines(result):
        console.print(line, soft_wrap=True)
    return 0


def cmd_path(args: argparse.Namespace) -> int:
    """Show the data file path."""
    _, _, storage = create_app_components()
    console.out(str(storage.location()), highlight=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledgerline",
        description="Track expenses in a local JSON store",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # add
    add_parser = subparsers.add_parser("add", help="Add a new expense")
    add_parser.add_argument("-a", "--amount", metavar="NUMBER", help="Amount")
    add_parser.add_argument("-c", "--category", help="Category")
    add_parser.add_argument("-d", "--date", metavar="YYYY-MM-DD", help="Date in YYYY-MM-DD")
    add_parser.add_argument("-n", "--note", help="Note")
    add_parser.add_argument(
        "--currency",
        metavar="CURRENCY",
        help=f"Currency (ISO code, default {DEFAULT_CURRENCY})",
    )
    add_parser.add_argument(
        "-i", "--interactive",
        action="store_true",
        help="Prompt for values",
    )
    add_parser.set_defaults(handler=cmd_add)

    # list
    list_parser = subparsers.add_parser("list", help="List expenses")
    list_parser.add_argument("-c", "--category", help="Filter by category")
    list_parser.add_argument("--since", metavar="YYYY-MM-DD", help="Start date inclusive")
    list_parser.add_argument("--until", metavar="YYYY-MM-DD", help="End date inclusive")
    list_parser.add_argument(
        "-l", "--limit",
        type=positive_int,
        metavar="N",
        help="Keep only the N most recent results",
    )
    list_parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Output raw JSON",
    )
    list_parser.set_defaults(handler=cmd_list)

    # path
    path_parser = subparsers.add_parser("path", help="Show the data file path")
    path_parser.set_defaults(handler=cmd_path)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(get_settings().app.log_level_number)

    if args.command is None:
        parser.print_help(sys.stderr)
        return 2

    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
