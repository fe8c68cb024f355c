"""Pure validation of raw user input.

Every check runs and every failure is collected, so a caller can report all
problems at once. Functions return best-effort parsed values next to the
errors; check the errors before trusting the values.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from budgeting.dates import parse_date
from budgeting.domain.currency import CurrencyError, parse_currency
from budgeting.domain.models import Cadence, Category, Cents

MAX_NAME_LENGTH = 255

_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

# Error codes
MISSING_FIELD = "MissingField"
TOO_LONG = "TooLong"
INVALID_AMOUNT = "InvalidAmount"
INVALID_DATE = "InvalidDate"
INVALID_COLOR = "InvalidColor"
INVALID_CADENCE = "InvalidCadence"


@dataclass(frozen=True)
class ValidationError:
    """A single problem with one input field."""

    field: str
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationErrors(list[ValidationError]):
    """Ordered collection of validation errors."""

    def has_errors(self) -> bool:
        return len(self) > 0

    def __str__(self) -> str:
        if not self:
            return "no validation errors"
        return "; ".join(str(error) for error in self)


def _check_name(name: str, errors: ValidationErrors, label: str = "Name") -> None:
    trimmed = name.strip()
    if not trimmed:
        errors.append(ValidationError("name", MISSING_FIELD, f"{label} is required"))
    elif len(trimmed) > MAX_NAME_LENGTH:
        errors.append(ValidationError("name", TOO_LONG, f"{label} must be {MAX_NAME_LENGTH} characters or less"))


def validate_transaction(
    name: str,
    amount_text: str,
    date_text: str,
    *,
    today: date | None = None,
    date_field: str = "date",
) -> tuple[Cents, date, ValidationErrors]:
    """Validate the fields shared by expenses and income.

    Args:
        name: Transaction name.
        amount_text: Amount as typed, e.g. "$1,234.50".
        date_text: Date as YYYY-MM-DD. Blank means today.
        today: The caller's current date. Defaults to date.today().
        date_field: Field name reported on date errors.

    Returns:
        Tuple of (amount_cents, transaction_date, errors). The amount is 0
        when it could not be parsed and the date falls back to today.
    """
    errors = ValidationErrors()
    if today is None:
        today = date.today()

    _check_name(name, errors)

    amount = Cents(0)
    if not amount_text.strip():
        errors.append(ValidationError("amount", MISSING_FIELD, "Amount is required"))
    else:
        try:
            amount = parse_currency(amount_text)
        except CurrencyError:
            errors.append(ValidationError("amount", INVALID_AMOUNT, "Amount must be a positive number"))

    txn_date = today
    if date_text.strip():
        try:
            txn_date = parse_date(date_text.strip())
        except ValueError:
            errors.append(ValidationError(date_field, INVALID_DATE, "Invalid date format (use YYYY-MM-DD)"))

    return amount, txn_date, errors


def validate_expense(
    name: str, amount_text: str, date_text: str, *, today: date | None = None
) -> tuple[Cents, date, ValidationErrors]:
    """Validate expense input. The category is chosen from existing records, so it is not checked here."""
    return validate_transaction(name, amount_text, date_text, today=today, date_field="expense_date")


def validate_income(
    name: str, amount_text: str, date_text: str, *, today: date | None = None
) -> tuple[Cents, date, ValidationErrors]:
    """Validate income input. Identical rules to expenses."""
    return validate_transaction(name, amount_text, date_text, today=today, date_field="income_date")


def validate_category(name: str, color: str = "") -> ValidationErrors:
    """Validate category input.

    Args:
        name: Category name.
        color: Optional #RRGGBB color. Blank means no color.

    Returns:
        Collected validation errors (empty if valid).
    """
    errors = ValidationErrors()
    _check_name(name, errors, label="Category name")

    trimmed_color = color.strip()
    if trimmed_color and not _COLOR_RE.match(trimmed_color):
        errors.append(ValidationError("color", INVALID_COLOR, "Color must be in hex format (e.g., #FF5733)"))

    return errors


def validate_cadence(text: str) -> tuple[Cadence | None, ValidationErrors]:
    """Validate a recurring cadence name (monthly, semi-annual, annual)."""
    errors = ValidationErrors()
    try:
        return Cadence(text.strip().lower()), errors
    except ValueError:
        allowed = ", ".join(c.value for c in Cadence)
        errors.append(ValidationError("cadence", INVALID_CADENCE, f"Cadence must be one of: {allowed}"))
        return None, errors


def category_name_taken(categories: Iterable[Category], name: str, exclude_id: int | None = None) -> bool:
    """Check whether a category name is already used, ignoring case.

    Args:
        categories: Existing categories.
        name: Proposed name.
        exclude_id: Category being renamed, which may keep its own name.

    Returns:
        True if another category already has this name.
    """
    wanted = name.strip().casefold()
    return any(c.name.strip().casefold() == wanted and c.id != exclude_id for c in categories)
