"""Tiny terminal UI helpers (prompt_toolkit-based) for the add flow.

Each helper asks for one field, validates it inline (the prompt stays open
with an error toolbar until the value parses) and returns the raw value for
:func:`budget_tracker.api.append_transaction` to validate authoritatively.
Helpers accept an optional ``PromptSession`` so tests can drive them with a
pipe input.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style
from prompt_toolkit.validation import ValidationError, Validator

from .models import SUGGESTED_CATEGORIES, capitalize, category_key, parse_amount, parse_date

DATE_MESSAGE = "Enter date (YYYY-MM-DD or YYYY/MM/DD, leave empty for today's date): "
DESCRIPTION_MESSAGE = "Enter description: "
CATEGORY_MESSAGE = "Enter category ({}): "
AMOUNT_MESSAGE = "Enter amount (negative for an expense): "

_STYLE = Style.from_dict({"auto-suggestion": "fg:#888888"})


class DateValidator(Validator):
    """Accept an empty line (today) or a date in either supported format."""

    def validate(self, document) -> None:
        text = document.text.strip()
        if not text:
            return
        try:
            parse_date(text)
        except ValueError:
            raise ValidationError(
                message="Invalid date format. Use YYYY-MM-DD or YYYY/MM/DD.",
                cursor_position=len(document.text),
            ) from None


class AmountValidator(Validator):
    def validate(self, document) -> None:
        try:
            parse_amount(document.text)
        except ValueError:
            raise ValidationError(
                message="Invalid amount. Please enter a valid number (e.g. -12.50).",
                cursor_position=len(document.text),
            ) from None


def _session(session: PromptSession | None) -> PromptSession:
    return session if session is not None else PromptSession(style=_STYLE)


def category_choices(existing: Iterable[str] = ()) -> list[str]:
    """Suggested categories followed by the ledger's own, without duplicates."""

    out: list[str] = []
    seen: set[str] = set()
    for name in (*SUGGESTED_CATEGORIES, *existing):
        key = category_key(name)
        if name and key not in seen:
            seen.add(key)
            out.append(name)
    return out


def prompt_date(
    *, session: PromptSession | None = None, today: dt.date | None = None
) -> dt.date:
    """Ask for a date; an empty answer means ``today``."""

    text = _session(session).prompt(
        DATE_MESSAGE, validator=DateValidator(), validate_while_typing=False
    )
    if not text.strip():
        return today or dt.date.today()
    return parse_date(text)


def prompt_description(*, session: PromptSession | None = None) -> str:
    return _session(session).prompt(DESCRIPTION_MESSAGE).strip()


def prompt_category(
    categories: Sequence[str] = SUGGESTED_CATEGORIES,
    *,
    session: PromptSession | None = None,
) -> str:
    """Ask for a category with case-insensitive completion over ``categories``.

    A typed value equal (ignoring case) to a known category returns the known
    spelling; anything else is returned capitalized as a new category.
    """

    words = list(categories)
    completer = WordCompleter(words, ignore_case=True, match_middle=True, sentence=True)
    text = _session(session).prompt(
        CATEGORY_MESSAGE.format(", ".join(words)),
        completer=completer,
        complete_while_typing=False,
    ).strip()
    by_key = {category_key(w): w for w in words}
    return by_key.get(category_key(text), capitalize(text))


def prompt_amount(*, session: PromptSession | None = None) -> str:
    """Ask for an amount until it parses; returns the text as typed."""

    return (
        _session(session)
        .prompt(AMOUNT_MESSAGE, validator=AmountValidator(), validate_while_typing=False)
        .strip()
    )


__all__ = [
    "AmountValidator",
    "DateValidator",
    "category_choices",
    "prompt_amount",
    "prompt_category",
    "prompt_date",
    "prompt_description",
]
