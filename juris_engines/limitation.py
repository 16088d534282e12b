"""
Module: juris_engines.limitation
Responsibility:
    Statute-of-limitations (prescription) deadlines.

    * Criminal: the maximum abstract penalty selects a prescription period
      from a fixed ladder; the period is halved for a reduced term (age of
      the defendant).
    * Civil: the term in years is chosen by the caller from a fixed set.

    The deadline is the start date plus the whole years of the period; the
    claim is expired when the evaluation date reaches the deadline.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    The evaluation date is an input field; the engine never reads a clock.

Failure modes:
    - DisallowedValueError for an unknown kind or civil term.
    - MissingFieldError when the branch's required field is absent.
    - NegativeValueError for a negative maximum penalty.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from juris_engines.dates import add_years
from juris_engines.tracer import traced_engine
from juris_kernel.exceptions import (
    DisallowedValueError,
    MissingFieldError,
    NegativeValueError,
)
from juris_kernel.logging_config import get_logger

logger = get_logger("engines.limitation")

# (minimum maximum-penalty in years, prescription period in years), checked in order.
CRIMINAL_PRESCRIPTION_LADDER: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("12"), Decimal("20")),
    (Decimal("8"), Decimal("16")),
    (Decimal("4"), Decimal("12")),
    (Decimal("2"), Decimal("8")),
    (Decimal("1"), Decimal("4")),
)
CRIMINAL_PRESCRIPTION_FLOOR = Decimal("3")
REDUCED_TERM_DIVISOR = Decimal("2")

CIVIL_TERM_YEARS: tuple[int, ...] = (10, 5, 3, 2, 1)


class LimitationKind(str, Enum):
    CRIMINAL = "criminal"
    CIVIL = "civil"


@dataclass(frozen=True)
class LimitationInput:
    """
    Immutable prescription request.

    Criminal requests use ``max_abstract_penalty`` and ``reduced_term``;
    civil requests use ``term_years``.  ``evaluation_date`` is the day on
    which expiry is judged.
    """

    kind: LimitationKind
    start_date: date
    evaluation_date: date
    max_abstract_penalty: Decimal | None = None
    reduced_term: bool = False
    term_years: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, LimitationKind):
            try:
                kind = LimitationKind(self.kind)
            except ValueError as e:
                raise DisallowedValueError(
                    "kind", self.kind, tuple(k.value for k in LimitationKind),
                ) from e
            object.__setattr__(self, "kind", kind)

    @classmethod
    def criminal(
        cls,
        max_abstract_penalty: Decimal,
        start_date: date,
        evaluation_date: date,
        reduced_term: bool = False,
    ) -> LimitationInput:
        return cls(
            kind=LimitationKind.CRIMINAL,
            start_date=start_date,
            evaluation_date=evaluation_date,
            max_abstract_penalty=max_abstract_penalty,
            reduced_term=reduced_term,
        )

    @classmethod
    def civil(
        cls,
        term_years: int,
        start_date: date,
        evaluation_date: date,
    ) -> LimitationInput:
        return cls(
            kind=LimitationKind.CIVIL,
            start_date=start_date,
            evaluation_date=evaluation_date,
            term_years=term_years,
        )


@dataclass(frozen=True)
class LimitationResult:
    """Deadline, expiry flag, and the period that produced the deadline."""

    period_years: Decimal
    deadline_date: date
    expired: bool


def criminal_period(max_abstract_penalty: Decimal, reduced_term: bool = False) -> Decimal:
    """
    Prescription period in years for a maximum abstract penalty.

    A reduced term halves the period, which can leave half a year
    (3 -> 1.5).  The half year is reported but does not move the
    deadline.
    """
    period = CRIMINAL_PRESCRIPTION_FLOOR
    for threshold, years in CRIMINAL_PRESCRIPTION_LADDER:
        if max_abstract_penalty >= threshold:
            period = years
            break
    if reduced_term:
        period = period / REDUCED_TERM_DIVISOR
    return period


class LimitationCalculator:
    """
    Compute prescription deadlines.

    Contract:
        Pure, stateless.  A lookup plus one date addition per call.
    """

    @traced_engine("limitation", "1.0", fingerprint_fields=("limitation_input",))
    def compute(self, limitation_input: LimitationInput) -> LimitationResult:
        if limitation_input.kind is LimitationKind.CRIMINAL:
            period = self._criminal_period(limitation_input)
        else:
            period = self._civil_period(limitation_input)

        # Only whole years move the deadline; half a year is dropped.
        deadline = add_years(limitation_input.start_date, int(period))
        expired = limitation_input.evaluation_date >= deadline

        logger.debug("limitation_computed", extra={
            "kind": limitation_input.kind.value,
            "start_date": limitation_input.start_date.isoformat(),
            "period_years": str(period),
            "deadline_date": deadline.isoformat(),
            "expired": expired,
        })
        return LimitationResult(period_years=period, deadline_date=deadline, expired=expired)

    @staticmethod
    def _criminal_period(limitation_input: LimitationInput) -> Decimal:
        penalty = limitation_input.max_abstract_penalty
        if penalty is None:
            raise MissingFieldError("max_abstract_penalty", "criminal prescription")
        if penalty < 0:
            raise NegativeValueError("max_abstract_penalty", penalty)
        return criminal_period(Decimal(penalty), limitation_input.reduced_term)

    @staticmethod
    def _civil_period(limitation_input: LimitationInput) -> Decimal:
        term = limitation_input.term_years
        if term is None:
            raise MissingFieldError("term_years", "civil prescription")
        if term not in CIVIL_TERM_YEARS:
            raise DisallowedValueError("term_years", term, CIVIL_TERM_YEARS)
        return Decimal(term)
