#!/usr/bin/env python3
"""Command-line interface for expense-tracker."""

import argparse
import sys

from expense_tracker.services.export_service import ExportService
from expense_tracker.services.presentation_sync import format_row, format_summary
from expense_tracker.services.transaction_repository import TransactionRepository
from expense_tracker.services.validation import ValidationError, build_candidate
from expense_tracker.store.base import DocumentStore, StoreError
from expense_tracker.store.firestore import FirestoreStore
from expense_tracker.utils.app_config import AppConfig, config_path, get_app_config, update_config
from expense_tracker.utils.constants import EXPORT_FILENAME, TRANSACTION_TYPES
from expense_tracker.utils.currency import format_currency
from expense_tracker.utils.date_helpers import DATE_FORMAT_OPTIONS, today_str
from expense_tracker.utils.logging_setup import configure_logging


def build_store(config: AppConfig) -> DocumentStore:
    return FirestoreStore(
        project_id=config.project_id,
        collection=config.collection,
        database=config.database,
        api_key=config.api_key,
        timeout=config.request_timeout,
        poll_interval=config.poll_interval,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expense-tracker-cli",
        description="Record and review income/expense transactions stored in Firestore",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  expense-tracker-cli list --category Food
  expense-tracker-cli summary
  expense-tracker-cli add --amount 250 --type expense --category Food --description "Groceries"
  expense-tracker-cli delete 8fJk2LmQ
  expense-tracker-cli export ~/Downloads/expense-tracker.csv
  expense-tracker-cli config --project-id my-project --api-key AIza...
        """,
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: config value or INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List transactions, newest first")
    list_cmd.add_argument("--category", help="Only show this category")

    summary_cmd = sub.add_parser("summary", help="Show income, expense, balance and breakdown")
    summary_cmd.add_argument("--category", help="Only summarize this category")

    add_cmd = sub.add_parser("add", help="Add a transaction")
    add_cmd.add_argument("--amount", required=True)
    add_cmd.add_argument("--type", choices=TRANSACTION_TYPES, default="expense")
    add_cmd.add_argument("--category", required=True)
    add_cmd.add_argument("--date", default=today_str(), help="YYYY-MM-DD (default: today)")
    add_cmd.add_argument("--description", required=True)

    delete_cmd = sub.add_parser("delete", help="Delete a transaction by id")
    delete_cmd.add_argument("id")

    export_cmd = sub.add_parser("export", help="Export all transactions to CSV")
    export_cmd.add_argument(
        "path", nargs="?", default=EXPORT_FILENAME,
        help=f"Output file (default: {EXPORT_FILENAME})",
    )

    config_cmd = sub.add_parser("config", help="Show or update the saved settings")
    config_cmd.add_argument("--project-id", help="Firestore project id")
    config_cmd.add_argument("--api-key", help="Web API key sent with each request")
    config_cmd.add_argument("--collection", help="Collection holding the transactions")
    config_cmd.add_argument("--currency-symbol", help="Symbol shown before amounts")
    config_cmd.add_argument(
        "--date-format", choices=DATE_FORMAT_OPTIONS, help="Date format used in CSV exports"
    )
    config_cmd.add_argument("--poll-interval", type=float, help="Seconds between change checks")
    return parser


def _run_config(args: argparse.Namespace) -> int:
    changes = {
        "project_id": args.project_id,
        "api_key": args.api_key,
        "collection": args.collection,
        "currency_symbol": args.currency_symbol,
        "date_format": args.date_format,
        "poll_interval": args.poll_interval,
    }
    if args.poll_interval is not None and args.poll_interval <= 0:
        print("Error: --poll-interval must be greater than 0", file=sys.stderr)
        return 1
    if any(v is not None for v in changes.values()):
        try:
            config = update_config(**changes)
        except OSError as e:
            print(f"Error: could not save {config_path()}: {e}", file=sys.stderr)
            return 1
        print(f"Saved {config_path()}")
    else:
        config = get_app_config()
    for key, value in config.to_dict().items():
        if key == "api_key" and value:
            value = "*" * 8
        print(f"{key:<16} {value}")
    return 0


def _print_rows(repo: TransactionRepository, symbol: str):
    view = repo.view()
    if view.is_empty:
        print("No transactions found.")
        return
    for tx in view.filtered:
        row = format_row(tx, symbol)
        print(f"{row.id:<22} {row.date:<12} {row.type_label:<8} {row.category:<14} "
              f"{row.amount:>14}  {row.description}")


def _print_summary(repo: TransactionRepository, symbol: str):
    view = repo.view()
    text = format_summary(view.summary, symbol)
    print(f"Total income:  {text.income}")
    print(f"Total expense: {text.expense}")
    print(f"Balance:       {text.balance}")
    if view.breakdown.is_empty:
        print("\nNo expenses to break down.")
        return
    print("\nExpenses by category:")
    for category, total in view.breakdown.items():
        print(f"  {category:<16} {format_currency(total, symbol)}")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    config = get_app_config()
    configure_logging(args.log_level or config.log_level)

    if args.command == "config":
        return _run_config(args)

    if not config.project_id:
        print(f"Error: no Firestore project configured. Set \"project_id\" in {config_path()}",
              file=sys.stderr)
        return 1

    repo = TransactionRepository(build_store(config))
    symbol = config.currency_symbol

    try:
        if args.command == "add":
            candidate = build_candidate({
                "amount": args.amount,
                "type": args.type,
                "category": args.category,
                "date": args.date,
                "description": args.description,
            })
            tx_id = repo.insert(candidate)
            print(f"Transaction added with id {tx_id}")
            return 0

        if args.command == "delete":
            repo.remove(args.id)
            print(f"Transaction deleted: {args.id}")
            return 0

        repo.reload(reset_filter=True)

        if args.command == "export":
            target = ExportService(date_format=config.date_format).export_csv(
                repo.transactions, args.path
            )
            print(f"Exported {len(repo.transactions)} transactions to {target}")
            return 0

        repo.set_filter(args.category)
        if args.command == "list":
            _print_rows(repo, symbol)
        else:
            _print_summary(repo, symbol)
        return 0

    except ValidationError as e:
        print("Validation errors:", file=sys.stderr)
        for message in e.messages:
            print(f"  - {message}", file=sys.stderr)
        return 1
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
