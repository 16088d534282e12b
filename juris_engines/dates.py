"""
Module: juris_engines.dates
Responsibility:
    Calendar and tenure arithmetic shared by the termination and
    prescription engines: whole-day differences, the 365/30-day tenure
    decomposition, proportional month counting with the 15th-day
    round-up rule, anniversaries, and year addition.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Tenure uses the fixed 365-day year / 30-day month approximation, not
      calendar-exact months.  Results built on it are reproducible.
    - Year addition delegates day-overflow to ``dateutil.relativedelta``:
      a Feb 29 source date lands on Feb 28 in a non-leap target year.
      The same applies to anniversaries: an admission on Feb 29 has its
      anniversary on Feb 28 in common years, so vacation months are
      counted from Feb 28.

Failure modes:
    - ValueError from ``anniversary_on_or_before`` when the reference date
      precedes the admission date.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from dateutil.relativedelta import relativedelta

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
ROUND_UP_FROM_DAY = 15


@dataclass(frozen=True)
class Tenure:
    """Length of service decomposed into years, months and days."""

    years: int
    months: int
    days: int

    @property
    def total_days(self) -> int:
        return self.years * DAYS_PER_YEAR + self.months * DAYS_PER_MONTH + self.days


def days_between(a: date, b: date) -> int:
    """Absolute whole-day difference between two dates."""
    return abs((b - a).days)


def tenure(admission: date, termination: date) -> Tenure:
    """
    Decompose the service period using 365-day years and 30-day months.

    Example:
        800 days -> 2 years, 2 months, 10 days (800 = 730 + 60 + 10).
    """
    total_days = days_between(admission, termination)
    remainder = total_days % DAYS_PER_YEAR
    return Tenure(
        years=total_days // DAYS_PER_YEAR,
        months=remainder // DAYS_PER_MONTH,
        days=remainder % DAYS_PER_MONTH,
    )


def months_elapsed(
    from_date: date,
    to_date: date,
    round_up_from_day: int | None = ROUND_UP_FROM_DAY,
) -> int:
    """
    Whole-month difference between two dates.

    One extra month is counted when ``to_date.day`` reaches
    ``round_up_from_day``.  Pass ``None`` to count whole months only.
    The day of ``from_date`` is not considered.
    """
    months = (to_date.year - from_date.year) * 12 + (to_date.month - from_date.month)
    if round_up_from_day is not None and to_date.day >= round_up_from_day:
        months += 1
    return months


def add_years(start: date, years: int) -> date:
    """
    Add whole years to a calendar date, preserving month and day.

    When the source day does not exist in the target month (Feb 29 into a
    non-leap year) the result is the last day of that month, following
    ``relativedelta``.
    """
    return start + relativedelta(years=years)


def anniversary_on_or_before(admission: date, reference: date) -> date:
    """
    Most recent anniversary of ``admission`` at or before ``reference``.

    The admission date itself counts as the zeroth anniversary.
    """
    if reference < admission:
        raise ValueError("reference date precedes admission date")

    anniversary = add_years(admission, reference.year - admission.year)
    if anniversary > reference:
        anniversary = add_years(admission, reference.year - admission.year - 1)
    return anniversary
