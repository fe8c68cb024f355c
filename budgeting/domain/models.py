"""Domain type definitions and records for budgeting.

- Cents: Amount in cents (minor units)
- RecordKind: The record families held by the store
- Category, Expense, Income, RecurringExpense, RecurringIncome: stored records

Records are immutable. Updating a record means writing a new full record
with the same id (see dataclasses.replace).
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import NewType

# Money amounts are stored as cents to avoid floating point errors
Cents = NewType("Cents", int)


class RecordKind(str, Enum):
    """Record families known to the gateway."""

    CATEGORY = "category"
    EXPENSE = "expense"
    INCOME = "income"
    RECURRING_EXPENSE = "recurring_expense"
    RECURRING_INCOME = "recurring_income"


class Cadence(str, Enum):
    """How often a recurring template repeats."""

    MONTHLY = "monthly"
    SEMI_ANNUAL = "semi-annual"
    ANNUAL = "annual"


@dataclass(frozen=True)
class Category:
    """Expense category. Names are unique regardless of case."""

    name: str
    color: str = ""
    id: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Expense:
    """A single money-out event."""

    name: str
    amount: Cents
    expense_date: date
    category_id: int | None = None
    notes: str = ""
    recurring_id: int | None = None
    id: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Income:
    """A single money-in event."""

    name: str
    amount: Cents
    income_date: date
    notes: str = ""
    recurring_id: int | None = None
    id: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class RecurringExpense:
    """Template for a periodic expense. Nothing generates records from it yet."""

    name: str
    amount: Cents
    cadence: Cadence
    start_date: date
    next_date: date
    category_id: int | None = None
    end_date: date | None = None
    active: bool = True
    id: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class RecurringIncome:
    """Template for a periodic income."""

    name: str
    amount: Cents
    cadence: Cadence
    start_date: date
    next_date: date
    end_date: date | None = None
    active: bool = True
    id: int | None = None
    created_at: datetime | None = None


Record = Category | Expense | Income | RecurringExpense | RecurringIncome
