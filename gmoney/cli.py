"""
Extract and summarize expenses from exported Gmail messages.

Usage:
    gmoney calculate messages.json                       # summary of every matched receipt
    gmoney calculate messages.json --month 2025-12       # only December 2025
    gmoney calculate messages.json --currency MXN --json # MXN transactions as JSON
    gmoney services                                      # list the service catalog
"""
import argparse
import json
import logging
import sys
from datetime import UTC, datetime, timedelta

from gmoney import __version__
from gmoney.catalog import load_catalog
from gmoney.config import settings
from gmoney.currency import SUPPORTED_CURRENCIES
from gmoney.exceptions import CatalogError, MessageSourceError
from gmoney.extractor import TransactionExtractor
from gmoney.messages import extract_address, load_messages
from gmoney.summary import filter_transactions, month_bounds, render_summary, summarize

logger = logging.getLogger(__name__)

DEBUG_MESSAGES = 10
DEBUG_BODY_CHARS = 200


def _day(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=UTC)


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gmoney", description="Extract expenses from receipt emails")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("version", help="Show version")

    services = sub.add_parser("services", help="List the configured services")
    services.add_argument("--catalog", type=str, help="Service catalog JSON (default: settings.catalog_path)")

    calc = sub.add_parser("calculate", help="Calculate and summarize expenses")
    calc.add_argument("messages", type=str, help="JSON file of Gmail API messages or flat message records")
    calc.add_argument("--catalog", type=str, help="Service catalog JSON (default: settings.catalog_path)")
    calc.add_argument("-f", "--from", dest="date_from", type=str, help="Start date (YYYY-MM-DD)")
    calc.add_argument("-t", "--to", dest="date_to", type=str, help="End date, inclusive (YYYY-MM-DD)")
    calc.add_argument("-m", "--month", type=str, help="Specific month (YYYY-MM), overrides --from/--to")
    calc.add_argument("-c", "--currency", type=str, help=f"Only this currency ({', '.join(SUPPORTED_CURRENCIES)})")
    calc.add_argument("--json", action="store_true", help="Print transactions as JSON instead of a summary")
    calc.add_argument("-d", "--debug", action="store_true", help="Show the first messages for troubleshooting")
    return parser


def _calculate(args: argparse.Namespace) -> int:
    try:
        date_from = _day(args.date_from) if args.date_from else None
        date_to = _day(args.date_to) + timedelta(days=1, microseconds=-1) if args.date_to else None
        if args.month:
            date_from, date_to = month_bounds(args.month)
    except ValueError as e:
        print(f"Invalid date filter: {e} (use YYYY-MM-DD, or YYYY-MM for --month)", file=sys.stderr)
        return 2

    catalog = load_catalog(args.catalog)
    messages = load_messages(args.messages)

    if args.debug:
        for i, msg in enumerate(messages[:DEBUG_MESSAGES], start=1):
            print(f"\nEmail {i}:")
            print(f"   From: {extract_address(msg.sender) or msg.sender}")
            print(f"   Subject: {msg.subject}")
            print(f"   Date: {msg.received_at.isoformat()}")
            print(f"   Body (first {DEBUG_BODY_CHARS} chars): {_truncate(msg.body, DEBUG_BODY_CHARS)}")

    transactions = TransactionExtractor(catalog).extract(messages)
    transactions = filter_transactions(transactions, date_from, date_to, args.currency)

    if args.json:
        print(json.dumps([t.to_dict() for t in transactions], indent=2, ensure_ascii=False))
        return 0

    if not transactions:
        print("No transactions could be extracted for the given filters.")
        if not args.debug:
            print("Try: gmoney calculate --debug  (to see the unmatched emails)")
        return 0

    print(render_summary(summarize(transactions), transactions))
    return 0


def _services(args: argparse.Namespace) -> int:
    catalog = load_catalog(args.catalog)
    for service in catalog:
        domains = ", ".join(service.email_domains) or "-"
        print(f"{service.id:<16} {service.name:<24} {service.category:<16} {domains}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s | %(message)s")

    if args.command == "version":
        print(f"gmoney v{__version__}")
        return 0

    try:
        if args.command == "services":
            return _services(args)
        return _calculate(args)
    except (CatalogError, MessageSourceError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
