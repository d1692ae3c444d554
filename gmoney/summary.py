import calendar
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from gmoney.currency import symbol_for
from gmoney.models import Transaction

RULE = "═" * 51
THIN_RULE = "─" * 49


@dataclass
class ExpenseSummary:
    total_amount: Decimal = Decimal(0)
    total_count: int = 0
    by_category: dict[str, Decimal] = field(default_factory=dict)
    by_service: dict[str, Decimal] = field(default_factory=dict)
    by_currency: dict[str, Decimal] = field(default_factory=dict)
    date_range: tuple[datetime, datetime] | None = None

    def top_services(self, n: int = 5) -> list[tuple[str, Decimal]]:
        return sorted(self.by_service.items(), key=lambda kv: kv[1], reverse=True)[:n]


def month_bounds(month: str) -> tuple[datetime, datetime]:
    """``"2025-02"`` -> first and last instant of February 2025 (UTC)."""
    start = datetime.strptime(month, "%Y-%m").replace(tzinfo=UTC)
    days = calendar.monthrange(start.year, start.month)[1]
    end = start + timedelta(days=days) - timedelta(microseconds=1)
    return start, end


def filter_transactions(
    transactions: Iterable[Transaction],
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    currency: str | None = None,
) -> list[Transaction]:
    result = []
    for txn in transactions:
        if date_from and txn.date < date_from:
            continue
        if date_to and txn.date > date_to:
            continue
        if currency and txn.currency.upper() != currency.upper():
            continue
        result.append(txn)
    return result


def summarize(transactions: Iterable[Transaction]) -> ExpenseSummary:
    # Amounts are added as-is; mixed currencies are only meaningful per currency.
    by_category: dict[str, Decimal] = defaultdict(Decimal)
    by_service: dict[str, Decimal] = defaultdict(Decimal)
    by_currency: dict[str, Decimal] = defaultdict(Decimal)
    total = Decimal(0)
    dates = []
    for txn in transactions:
        total += txn.amount
        by_category[txn.category] += txn.amount
        by_service[txn.service_name] += txn.amount
        by_currency[txn.currency] += txn.amount
        dates.append(txn.date)

    return ExpenseSummary(
        total_amount=total,
        total_count=len(dates),
        by_category=dict(by_category),
        by_service=dict(by_service),
        by_currency=dict(by_currency),
        date_range=(min(dates), max(dates)) if dates else None,
    )


def _share(amount: Decimal, total: Decimal) -> float:
    return float(amount / total * 100) if total else 0.0


def render_summary(summary: ExpenseSummary, transactions: list[Transaction]) -> str:
    lines = ["", RULE, "           EXPENSE SUMMARY", RULE]
    if not transactions:
        lines.append("No transactions found")
        return "\n".join(lines)

    # Single-currency reports keep that currency's symbol.
    symbol = symbol_for(next(iter(summary.by_currency))) if len(summary.by_currency) == 1 else ""

    lines += ["", "Transactions:", THIN_RULE]
    for i, txn in enumerate(transactions, start=1):
        lines.append(f"{i}. {txn.service_name} - {txn.currency_symbol}{txn.amount:.2f} {txn.currency}")
        lines.append(f"   Category: {txn.category} | Date: {txn.date:%Y-%m-%d}")
        lines.append(f"   Subject: {txn.subject}")

    lines += ["", "Summary by Category:", THIN_RULE]
    for category, amount in summary.by_category.items():
        lines.append(f"{category:<20}: {symbol}{amount:8.2f} ({_share(amount, summary.total_amount):.1f}%)")

    lines += ["", "Summary by Service (Top 5):", THIN_RULE]
    for service, amount in summary.top_services():
        lines.append(f"{service:<20}: {symbol}{amount:8.2f} ({_share(amount, summary.total_amount):.1f}%)")

    if len(summary.by_currency) > 1:
        lines += ["", "Totals by Currency:", THIN_RULE]
        for currency, amount in sorted(summary.by_currency.items()):
            lines.append(f"{currency:<20}: {symbol_for(currency)}{amount:8.2f}")

    lines += ["", RULE]
    if len(summary.by_currency) == 1:
        lines.append(f"TOTAL EXPENSES: {symbol}{summary.total_amount:.2f}")
    lines.append(f"Number of Transactions: {summary.total_count}")
    if summary.date_range:
        start, end = summary.date_range
        lines.append(f"Date Range: {start:%Y-%m-%d} to {end:%Y-%m-%d}")
    lines.append(RULE)
    return "\n".join(lines)
