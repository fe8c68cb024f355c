"""Ledger aggregation: the recent transaction feed and monthly overview.

This module contains the functional core for the dashboard:
- No console or file I/O; records come from an injected gateway
- No state kept between calls
- Money stays in integer cents; formatted text is derived alongside

All monetary amounts are in cents (Cents type).
"""

from dataclasses import dataclass
from datetime import date
from typing import Literal

from budgeting.dates import format_date, period_bounds
from budgeting.domain.currency import format_currency
from budgeting.domain.models import Category, Cents, Expense, Income, RecordKind
from budgeting.errors import NotFoundError
from budgeting.store.gateway import RecordGateway, date_field_for

TransactionKind = Literal["expense", "income"]


@dataclass(frozen=True)
class Transaction:
    """Read-only view of an expense or income for display."""

    kind: TransactionKind
    id: int
    name: str
    amount: str  # formatted, e.g. "$12.34"
    amount_raw: Cents
    date: str  # YYYY-MM-DD
    date_parsed: date
    category: str | None = None
    category_id: int | None = None
    notes: str = ""


@dataclass(frozen=True)
class MoneyAmount:
    """Exact cents plus their display text."""

    cents: Cents
    text: str

    @classmethod
    def of(cls, cents: int) -> "MoneyAmount":
        return cls(cents=Cents(cents), text=format_currency(cents))


@dataclass(frozen=True)
class OverviewStats:
    """Income, expenses and net savings for one month."""

    month: int
    year: int
    total_income: MoneyAmount
    total_expenses: MoneyAmount
    net_savings: MoneyAmount  # may be negative
    is_positive: bool  # zero counts as positive


def _resolve_category_name(
    gateway: RecordGateway, category_id: int | None, cache: dict[int, str | None]
) -> str | None:
    """Look up a category name, tolerating a missing category."""
    if category_id is None:
        return None
    if category_id not in cache:
        try:
            category = gateway.find_by_id(RecordKind.CATEGORY, category_id)
        except NotFoundError:
            cache[category_id] = None
        else:
            assert isinstance(category, Category)
            cache[category_id] = category.name
    return cache[category_id]


def expense_to_transaction(expense: Expense, category_name: str | None = None) -> Transaction:
    """Project an expense into the feed shape."""
    assert expense.id is not None
    return Transaction(
        kind="expense",
        id=expense.id,
        name=expense.name,
        amount=format_currency(expense.amount),
        amount_raw=expense.amount,
        date=format_date(expense.expense_date),
        date_parsed=expense.expense_date,
        category=category_name,
        category_id=expense.category_id,
        notes=expense.notes,
    )


def income_to_transaction(income: Income) -> Transaction:
    """Project an income into the feed shape. Income never has a category."""
    assert income.id is not None
    return Transaction(
        kind="income",
        id=income.id,
        name=income.name,
        amount=format_currency(income.amount),
        amount_raw=income.amount,
        date=format_date(income.income_date),
        date_parsed=income.income_date,
        notes=income.notes,
    )


def merge_transactions(expenses: list[Transaction], incomes: list[Transaction], limit: int) -> list[Transaction]:
    """Merge two feeds newest first and keep the first limit entries.

    The sort is stable, so entries sharing a date keep their input order:
    expenses before incomes, each in the order they were read.

    Args:
        expenses: Projected expenses, newest first.
        incomes: Projected incomes, newest first.
        limit: Maximum entries to return.

    Returns:
        Combined feed ordered by date descending.
    """
    if limit <= 0:
        return []
    combined = sorted(expenses + incomes, key=lambda txn: txn.date_parsed, reverse=True)
    return combined[:limit]


def recent_transactions(gateway: RecordGateway, limit: int) -> list[Transaction]:
    """Build the recent activity feed from expenses and income.

    Each source is read independently, up to limit records apiece, then the
    two are merged and truncated. Every entry of the true top limit is within
    the top limit of its own source, so the result is exact.

    Args:
        gateway: Record store to read from.
        limit: Maximum number of transactions to return.

    Returns:
        Up to limit transactions ordered by date descending.

    Raises:
        sqlite3.Error: Store failures are propagated unchanged.
    """
    if limit <= 0:
        return []

    category_names: dict[int, str | None] = {}
    expenses: list[Transaction] = []
    for record in gateway.find_latest(RecordKind.EXPENSE, limit):
        assert isinstance(record, Expense)
        name = _resolve_category_name(gateway, record.category_id, category_names)
        expenses.append(expense_to_transaction(record, name))

    incomes: list[Transaction] = []
    for record in gateway.find_latest(RecordKind.INCOME, limit):
        assert isinstance(record, Income)
        incomes.append(income_to_transaction(record))

    return merge_transactions(expenses, incomes, limit)


def summarize(month: int, year: int, income_cents: list[int], expense_cents: list[int]) -> OverviewStats:
    """Total both sides of a month and derive net savings.

    Args:
        month: Month number (1-12).
        year: Four digit year.
        income_cents: Income amounts in the month.
        expense_cents: Expense amounts in the month.

    Returns:
        OverviewStats with raw cents and formatted text for every total.
    """
    total_income = sum(income_cents)
    total_expenses = sum(expense_cents)
    net_savings = total_income - total_expenses

    return OverviewStats(
        month=month,
        year=year,
        total_income=MoneyAmount.of(total_income),
        total_expenses=MoneyAmount.of(total_expenses),
        net_savings=MoneyAmount.of(net_savings),
        is_positive=net_savings >= 0,
    )


def period_overview(gateway: RecordGateway, month: int, year: int) -> OverviewStats:
    """Calculate total income, expenses and net savings for a month.

    The range runs from midnight on the 1st to one second before the next
    month, so the whole last day is included.

    Args:
        gateway: Record store to read from.
        month: Month number (1-12).
        year: Four digit year.

    Returns:
        OverviewStats for the month.

    Raises:
        InvalidMonthError: If month is outside 1..12.
        InvalidYearError: If year is outside the supported range.
        sqlite3.Error: Store failures are propagated unchanged.
    """
    start, end = period_bounds(month, year)

    expenses = gateway.find_in_range(RecordKind.EXPENSE, date_field_for(RecordKind.EXPENSE), start, end)
    incomes = gateway.find_in_range(RecordKind.INCOME, date_field_for(RecordKind.INCOME), start, end)

    return summarize(
        month,
        year,
        income_cents=[record.amount for record in incomes if isinstance(record, Income)],
        expense_cents=[record.amount for record in expenses if isinstance(record, Expense)],
    )
