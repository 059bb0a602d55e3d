"""Data models and value helpers for ``budget_tracker``.

The ledger has a single entity, :class:`Transaction`. Amounts are kept as
signed integer cents (negative = expense) so sums are exact; the textual forms
used in the CSV file and at the prompts are converted with
:func:`parse_amount` / :func:`format_amount`.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# Shown as completion hints at the category prompt. Any string is accepted.
SUGGESTED_CATEGORIES: tuple[str, ...] = ("Food", "Travel", "Fun", "Medical", "Personal", "Other")

_DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%Y/%m/%d")

# Largest accepted amount is just under 10**MAX_AMOUNT_DIGITS currency units.
MAX_AMOUNT_DIGITS = 15


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single dated money movement.

    Records are immutable; an edit replaces the whole record.
    """

    date: dt.date
    description: str
    category: str
    amount: int  # signed cents

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def category_key(self) -> str:
        return category_key(self.category)


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def category_key(category: str) -> str:
    """Return the case-insensitive grouping/matching key for a category."""

    return category.lower()


def capitalize(text: str) -> str:
    """Upper-case the first character only (``"food court"`` -> ``"Food court"``)."""

    if not text:
        return ""
    return text[0].upper() + text[1:]


def parse_date(value: str | dt.date) -> dt.date:
    """Parse ``YYYY-MM-DD`` or ``YYYY/MM/DD`` into a :class:`datetime.date`."""

    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"invalid date: {value!r}")
    s = value.strip()
    if not s:
        raise ValueError("date is empty")
    for fmt in _DATE_FORMATS:
        try:
            return dt.datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"invalid date (expected YYYY-MM-DD or YYYY/MM/DD): {value!r}")


def format_date(value: dt.date) -> str:
    return value.isoformat()


def parse_amount(value: str | Decimal | int | float) -> int:
    """Convert a signed decimal currency amount into integer cents.

    Accepts text such as ``"-12"``, ``"+3.5"`` or ``"-12.50"`` as well as
    ``Decimal``/``int``/``float`` values in currency units. More than two
    decimal places, non-finite values, non-numeric text and magnitudes of
    ``MAX_AMOUNT_DIGITS`` or more integer digits are rejected. The conversion
    is exact; nothing is rounded.
    """

    if isinstance(value, bool):
        raise ValueError(f"invalid amount: {value!r}")
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int):
        d = Decimal(value)
    elif isinstance(value, float):
        d = Decimal(repr(value))
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            raise ValueError("amount is empty")
        try:
            d = Decimal(s)
        except ArithmeticError as exc:
            raise ValueError(f"invalid amount: {value!r}") from exc
    else:
        raise ValueError(f"invalid amount: {value!r}")

    if not d.is_finite():
        raise ValueError(f"invalid amount: {value!r}")
    sign, digits, exponent = d.as_tuple()
    coeff = int("".join(map(str, digits)))
    if coeff == 0:
        return 0
    if d.adjusted() >= MAX_AMOUNT_DIGITS:
        raise ValueError(f"amount out of range: {value!r}")

    # Integer arithmetic on the coefficient avoids the decimal context's
    # precision and exponent limits.
    shift = exponent + 2
    if shift >= 0:
        cents = coeff * 10**shift
    else:
        cents, rest = divmod(coeff, 10 ** min(-shift, len(digits)))
        if rest:
            raise ValueError(f"amount has more than two decimal places: {value!r}")
    return -cents if sign else cents


def format_amount(cents: int) -> str:
    """Render cents as a signed decimal with exactly two places (``-12.50``)."""

    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(cents), 100)
    return f"{sign}{whole}.{frac:02d}"


# ---------------------------------------------------------------------------
# Add-path input validation
# ---------------------------------------------------------------------------


class TransactionInput(BaseModel):
    """Validated fields for a transaction entered through the add path.

    ``date`` accepts a date or ``YYYY-MM-DD`` / ``YYYY/MM/DD`` text; ``amount``
    accepts a signed decimal in currency units and is stored as cents. New
    categories are capitalized (``food`` -> ``Food``).
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    date: dt.date
    description: str
    category: str
    amount: int

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> dt.date:
        return parse_date(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, v: Any) -> int:
        return parse_amount(v)

    @field_validator("category")
    @classmethod
    def _capitalize_category(cls, v: str) -> str:
        return capitalize(v)

    def to_transaction(self) -> Transaction:
        return Transaction(
            date=self.date,
            description=self.description,
            category=self.category,
            amount=self.amount,
        )


__all__ = [
    "MAX_AMOUNT_DIGITS",
    "SUGGESTED_CATEGORIES",
    "Transaction",
    "TransactionInput",
    "capitalize",
    "category_key",
    "format_amount",
    "format_date",
    "parse_amount",
    "parse_date",
]
