"""Conversion between currency text and integer cents.

Amounts are parsed with Decimal so no binary floating point is involved.
Ties on a half cent round away from zero: "12.345" -> 1235, "12.335" -> 1234.
"""

import re
from decimal import ROUND_HALF_UP, Decimal

from budgeting.domain.models import Cents

_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


class CurrencyError(ValueError):
    """Base class for currency parsing failures."""


class EmptyAmountError(CurrencyError):
    """Amount text was empty after cleaning."""


class InvalidFormatError(CurrencyError):
    """Amount text is not a base-10 decimal number."""


class NonPositiveAmountError(CurrencyError):
    """Amount parsed to zero or less."""


def parse_currency(text: str) -> Cents:
    """Convert a dollar string to cents.

    Examples: "12.34" -> 1234, "5" -> 500, "0.99" -> 99, "$1,000.50" -> 100050

    Args:
        text: Human-entered amount. "$" and "," may appear anywhere.

    Returns:
        Amount in cents.

    Raises:
        EmptyAmountError: If nothing is left after cleaning.
        InvalidFormatError: If the text is not a decimal number.
        NonPositiveAmountError: If the value is zero or negative, or rounds to zero cents.
    """
    cleaned = text.strip().replace("$", "").replace(",", "")

    if not cleaned:
        raise EmptyAmountError("amount cannot be empty")

    if not _DECIMAL_RE.match(cleaned):
        raise InvalidFormatError(f"invalid amount format: {text!r}")

    value = Decimal(cleaned)
    if value <= 0:
        raise NonPositiveAmountError("amount must be positive")

    cents = int((value * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    if cents <= 0:
        raise NonPositiveAmountError("amount must be at least one cent")

    return Cents(cents)


def format_currency(cents: int) -> str:
    """Format cents as a USD string.

    Examples: 1234 -> "$12.34", 500000 -> "$5,000.00", -1234 -> "-$12.34"
    """
    dollars, remainder = divmod(abs(cents), 100)
    sign = "-" if cents < 0 else ""
    return f"{sign}${dollars:,}.{remainder:02d}"
