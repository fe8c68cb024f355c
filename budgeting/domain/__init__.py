"""Domain models and types for budgeting.

This package contains the functional core:
- Pure functions with no side effects
- Reads and writes go through an injected gateway, never a global
- Easy to test
- Business logic separated from infrastructure
"""

from budgeting.domain.models import (
    Cadence,
    Category,
    Cents,
    Expense,
    Income,
    Record,
    RecordKind,
    RecurringExpense,
    RecurringIncome,
)

__all__ = [
    "Cadence",
    "Category",
    "Cents",
    "Expense",
    "Income",
    "Record",
    "RecordKind",
    "RecurringExpense",
    "RecurringIncome",
]
