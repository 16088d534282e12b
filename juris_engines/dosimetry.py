"""
Module: juris_engines.dosimetry
Responsibility:
    Three-phase criminal sentence calculation.

    1. Base penalty, chosen inside the crime's legal range.
    2. Statutory circumstances: each net aggravating (or mitigating)
       circumstance moves the penalty by 1/6 of the base; the result is
       clamped to the legal range.
    3. Causes of increase and decrease: multiplicative legal fractions,
       applied in that order and NOT clamped, so the final penalty may
       leave the legal range.

    The final penalty determines the initial prison regime.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Self-contained.

Invariants enforced:
    - Penalties are exact rationals (``Fraction``); sixths and thirds never
      accumulate rounding error, so regime thresholds compare exactly.
    - Phase 2 lies within [penalty_min, penalty_max]; phase 3 does not
      have to.

Failure modes:
    - InvalidPenaltyRangeError for a malformed crime range.
    - PenaltyOutOfRangeError for a base outside the range.
    - NegativeValueError for negative circumstance counts.
    - DisallowedValueError for fractions outside the enumerated set, or a
      decrease of 1.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction

from juris_engines.tracer import traced_engine
from juris_kernel.exceptions import (
    DisallowedValueError,
    InvalidPenaltyRangeError,
    NegativeValueError,
    PenaltyOutOfRangeError,
)
from juris_kernel.logging_config import get_logger

logger = get_logger("engines.dosimetry")

CIRCUMSTANCE_FRACTION = Fraction(1, 6)

# Regime thresholds in years (final penalty).
CLOSED_REGIME_ABOVE = Fraction(8)
SEMI_OPEN_REGIME_ABOVE = Fraction(4)


class PenaltyFraction(str, Enum):
    """Legal fractions for phase-3 causes. Values are part of the contract."""

    NONE = "0"
    ONE_SIXTH = "1/6"
    ONE_THIRD = "1/3"
    HALF = "1/2"
    TWO_THIRDS = "2/3"
    WHOLE = "1"

    @property
    def ratio(self) -> Fraction:
        return Fraction(self.value)

    @classmethod
    def coerce(cls, value: "PenaltyFraction | str | Fraction | int", field_name: str) -> "PenaltyFraction":
        """Accept a member, its literal, or an equal rational value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip())
            except ValueError:
                pass
        elif isinstance(value, (Fraction, int, Decimal)) and not isinstance(value, bool):
            for member in cls:
                if member.ratio == Fraction(value):
                    return member
        raise DisallowedValueError(field_name, value, tuple(m.value for m in cls))


ALLOWED_DECREASES: tuple[PenaltyFraction, ...] = tuple(
    f for f in PenaltyFraction if f is not PenaltyFraction.WHOLE
)


class PrisonRegime(str, Enum):
    """Initial regime for serving the sentence."""

    OPEN = "OPEN"
    SEMI_OPEN = "SEMI_OPEN"
    CLOSED = "CLOSED"


def _as_fraction(value: Fraction | Decimal | int | str) -> Fraction:
    return value if isinstance(value, Fraction) else Fraction(value)


@dataclass(frozen=True)
class CrimeRecord:
    """Legal penalty range in years, with optional catalog description."""

    penalty_min: Fraction
    penalty_max: Fraction
    article: str = ""
    name: str = ""
    legislation: str = ""
    crime_id: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "penalty_min", _as_fraction(self.penalty_min))
        object.__setattr__(self, "penalty_max", _as_fraction(self.penalty_max))

    def contains(self, penalty: Fraction) -> bool:
        return self.penalty_min <= penalty <= self.penalty_max

    def clamp(self, penalty: Fraction) -> Fraction:
        return min(max(penalty, self.penalty_min), self.penalty_max)


@dataclass(frozen=True)
class DosimetryInput:
    """
    Immutable dosimetry request.

    ``base_penalty`` accepts Decimal, int, str or Fraction and is stored
    as an exact Fraction.  Fractions accept members or their literals.
    """

    crime: CrimeRecord
    base_penalty: Fraction
    aggravating_count: int = 0
    mitigating_count: int = 0
    increase_fraction: PenaltyFraction = PenaltyFraction.NONE
    decrease_fraction: PenaltyFraction = PenaltyFraction.NONE

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_penalty", _as_fraction(self.base_penalty))
        object.__setattr__(
            self, "increase_fraction",
            PenaltyFraction.coerce(self.increase_fraction, "increase_fraction"),
        )
        object.__setattr__(
            self, "decrease_fraction",
            PenaltyFraction.coerce(self.decrease_fraction, "decrease_fraction"),
        )


@dataclass(frozen=True)
class DosimetryResult:
    """Penalty after each phase, in years, and the resulting regime."""

    phase1: Fraction
    phase2: Fraction
    phase3: Fraction
    regime: PrisonRegime

    @property
    def final_penalty(self) -> Fraction:
        return self.phase3


def to_decimal(value: Fraction, places: int = 4) -> Decimal:
    """Decimal rendering of a penalty, for display or export."""
    quantum = Decimal(1).scaleb(-places)
    return (Decimal(value.numerator) / Decimal(value.denominator)).quantize(quantum)


def classify_regime(final_penalty: Fraction) -> PrisonRegime:
    if final_penalty > CLOSED_REGIME_ABOVE:
        return PrisonRegime.CLOSED
    if final_penalty > SEMI_OPEN_REGIME_ABOVE:
        return PrisonRegime.SEMI_OPEN
    return PrisonRegime.OPEN


def format_years(value: Fraction | Decimal | int) -> str:
    """
    Render a penalty in years as pt-BR text.

    Whole years are floored and the remainder is rounded to months:
    ``Fraction(7, 2)`` -> ``"3 ano(s) e 6 mês(es)"``, ``0`` -> ``"0"``.
    """
    years = _as_fraction(value)
    whole = math.floor(years)
    months = math.floor((years - whole) * 12 + Fraction(1, 2))

    text = ""
    if whole > 0:
        text += f"{whole} ano(s)"
    if months > 0:
        text += f"{' e ' if text else ''}{months} mês(es)"
    return text or "0"


class DosimetryCalculator:
    """
    Three-phase sentence calculator.

    Contract:
        Pure, stateless; one ``compute`` call per request.
    Guarantees:
        - Raising ``aggravating_count`` never lowers phase 2; raising
          ``mitigating_count`` never takes phase 2 below the legal minimum.
    """

    @traced_engine("dosimetry", "1.0", fingerprint_fields=("dosimetry_input",))
    def compute(self, dosimetry_input: DosimetryInput) -> DosimetryResult:
        self._validate(dosimetry_input)
        crime = dosimetry_input.crime

        phase1 = dosimetry_input.base_penalty
        phase2 = self.apply_circumstances(
            crime,
            phase1,
            dosimetry_input.aggravating_count,
            dosimetry_input.mitigating_count,
        )
        phase3 = self.apply_causes(
            phase2,
            dosimetry_input.increase_fraction,
            dosimetry_input.decrease_fraction,
        )
        regime = classify_regime(phase3)

        logger.debug("dosimetry_computed", extra={
            "crime_article": crime.article,
            "phase1": str(phase1),
            "phase2": str(phase2),
            "phase3": str(phase3),
            "regime": regime.value,
        })
        return DosimetryResult(phase1=phase1, phase2=phase2, phase3=phase3, regime=regime)

    @staticmethod
    def apply_circumstances(
        crime: CrimeRecord,
        base: Fraction,
        aggravating: int,
        mitigating: int,
    ) -> Fraction:
        """Phase 2: one sixth of the base per net circumstance, clamped."""
        moved = base + base * CIRCUMSTANCE_FRACTION * (aggravating - mitigating)
        return crime.clamp(moved)

    @staticmethod
    def apply_causes(
        penalty: Fraction,
        increase: PenaltyFraction,
        decrease: PenaltyFraction,
    ) -> Fraction:
        """Phase 3: increase then decrease, unclamped."""
        increased = penalty * (1 + increase.ratio)
        return increased * (1 - decrease.ratio)

    @staticmethod
    def _validate(dosimetry_input: DosimetryInput) -> None:
        crime = dosimetry_input.crime
        if crime.penalty_min < 0 or crime.penalty_min > crime.penalty_max:
            raise InvalidPenaltyRangeError(crime.penalty_min, crime.penalty_max)
        if not crime.contains(dosimetry_input.base_penalty):
            raise PenaltyOutOfRangeError(
                dosimetry_input.base_penalty, crime.penalty_min, crime.penalty_max,
            )
        if dosimetry_input.aggravating_count < 0:
            raise NegativeValueError("aggravating_count", dosimetry_input.aggravating_count)
        if dosimetry_input.mitigating_count < 0:
            raise NegativeValueError("mitigating_count", dosimetry_input.mitigating_count)
        if dosimetry_input.decrease_fraction not in ALLOWED_DECREASES:
            raise DisallowedValueError(
                "decrease_fraction",
                dosimetry_input.decrease_fraction.value,
                tuple(f.value for f in ALLOWED_DECREASES),
            )
