"""
Parsing -- Locale-aware conversion of raw form strings.

Responsibility:
    Converts the strings typed into calculator forms into ``Decimal``,
    ``int`` and ``date`` values before any engine runs. Monetary values use
    the pt-BR convention: dot as thousands separator, comma as decimal
    separator (``"1.234,56"``).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Monetary values never pass through ``float``.
    - Every failure raises a ``FormatError`` subclass carrying the raw
      value; no input is silently coerced to zero except a blank count,
      which defaults explicitly.

Failure modes:
    - AmountFormatError for malformed money strings.
    - NumberFormatError for malformed counts and year values.
    - DateFormatError for malformed or impossible dates.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from juris_kernel.exceptions import (
    AmountFormatError,
    DateFormatError,
    NumberFormatError,
)

# 1234,56 | 1.234,56 | 1234 | -10,5
_AMOUNT_RE = re.compile(r"^-?(\d{1,3}(\.\d{3})+|\d+)(,\d+)?$")
_DECIMAL_RE = re.compile(r"^-?\d+([.,]\d+)?$")
_INTEGER_RE = re.compile(r"^-?\d+$")
_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_BR_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")

_CURRENCY_PREFIX = "R$"


def parse_amount(raw: str) -> Decimal:
    """
    Parse a pt-BR monetary string into a Decimal.

    Accepts an optional ``R$`` prefix and surrounding whitespace.

    Raises:
        AmountFormatError: if the string is blank or malformed.
    """
    text = (raw or "").strip()
    if text.startswith(_CURRENCY_PREFIX):
        text = text[len(_CURRENCY_PREFIX):].strip()
    if not _AMOUNT_RE.match(text):
        raise AmountFormatError(raw, "pt-BR amount such as 1.234,56")
    normalized = text.replace(".", "").replace(",", ".")
    try:
        return Decimal(normalized)
    except InvalidOperation as e:
        raise AmountFormatError(raw, "pt-BR amount such as 1.234,56") from e


def parse_optional_amount(raw: str | None) -> Decimal | None:
    """Parse an optional monetary field; blank means not supplied."""
    if raw is None or not raw.strip():
        return None
    return parse_amount(raw)


def parse_decimal(raw: str) -> Decimal:
    """
    Parse a plain decimal number (years of penalty, for instance).

    Either a comma or a dot is accepted as decimal separator; thousands
    separators are not.
    """
    text = (raw or "").strip()
    if not _DECIMAL_RE.match(text):
        raise NumberFormatError(raw, "decimal number such as 4 or 0,25")
    return Decimal(text.replace(",", "."))


def parse_count(raw: str | int | None, default: int = 0) -> int:
    """
    Parse a whole-number count. Blank or None yields ``default``.

    Raises:
        NumberFormatError: if the string is not an integer.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if raw is None or not str(raw).strip():
        return default
    text = str(raw).strip()
    if not _INTEGER_RE.match(text):
        raise NumberFormatError(str(raw), "whole number")
    return int(text)


def parse_date(raw: str | date) -> date:
    """
    Parse an ISO (``2024-03-15``) or pt-BR (``15/03/2024``) date.

    Raises:
        DateFormatError: if the string matches neither form or names an
            impossible date.
    """
    if isinstance(raw, date):
        return raw
    text = (raw or "").strip()

    iso = _ISO_DATE_RE.match(text)
    br = _BR_DATE_RE.match(text)
    if iso:
        year, month, day = (int(g) for g in iso.groups())
    elif br:
        day, month, year = (int(g) for g in br.groups())
    else:
        raise DateFormatError(raw, "YYYY-MM-DD or DD/MM/YYYY")

    try:
        return date(year, month, day)
    except ValueError as e:
        raise DateFormatError(raw, "an existing calendar date") from e
