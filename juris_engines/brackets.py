"""
Module: juris_engines.brackets
Responsibility:
    Progressive-rate evaluation over ordered bracket tables.  Two
    variants are provided:

    * ``cumulative_progressive`` -- each band's marginal rate applies only
      to the slice of the base inside that band; nothing above the top
      band is charged (contribution ceiling).  Social-security (INSS)
      style.
    * ``single_bracket`` -- one band is selected by the base and
      ``base * rate - deduction`` is applied to the whole base, clamped at
      zero.  Withholding income tax (IRRF) style.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Tables are supplied by the caller; the yearly values live in the
    configuration sets (see ``juris_config.bridges``).

Invariants enforced:
    - Decimal-only arithmetic, no rounding: results are raw decimals.
    - Band sequences are strictly ascending; only the last withholding band
      may be unbounded.

Failure modes:
    - ValueError when a table is empty, unordered, or has a negative rate.

Usage:
    from decimal import Decimal
    from juris_engines.brackets import ProgressiveBand, cumulative_progressive

    bands = (
        ProgressiveBand(Decimal("1412.00"), Decimal("0.075")),
        ProgressiveBand(Decimal("2666.68"), Decimal("0.09")),
    )
    cumulative_progressive(Decimal("1412.00"), bands)  # Decimal("105.9000")
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from juris_kernel.logging_config import get_logger

logger = get_logger("engines.brackets")

_ZERO = Decimal("0")


@dataclass(frozen=True)
class ProgressiveBand:
    """
    One band of a cumulative table.

    The band's lower bound is the previous band's upper bound (zero for
    the first band).
    """

    upper_bound: Decimal
    rate: Decimal

    def __post_init__(self) -> None:
        if self.rate < _ZERO:
            raise ValueError("rate cannot be negative")


@dataclass(frozen=True)
class WithholdingBand:
    """
    One band of a single-bracket table.

    ``upper_bound`` is inclusive; ``None`` marks the open top band.
    """

    upper_bound: Decimal | None
    rate: Decimal
    deduction: Decimal = _ZERO

    def __post_init__(self) -> None:
        if self.rate < _ZERO:
            raise ValueError("rate cannot be negative")

    def covers(self, base: Decimal) -> bool:
        return self.upper_bound is None or base <= self.upper_bound


@dataclass(frozen=True)
class WithholdingTable:
    """Single-bracket bands plus the fixed per-dependent base deduction."""

    bands: tuple[WithholdingBand, ...]
    dependent_deduction: Decimal = _ZERO

    def __post_init__(self) -> None:
        validate_withholding_bands(self.bands)

    def taxable_base(self, amount: Decimal, dependents: int) -> Decimal:
        """Base after subtracting the dependents deduction."""
        return amount - self.dependent_deduction * dependents


def validate_progressive_bands(bands: Sequence[ProgressiveBand]) -> None:
    """Require a non-empty, strictly ascending cumulative table."""
    if not bands:
        raise ValueError("progressive table must have at least one band")
    previous = _ZERO
    for band in bands:
        if band.upper_bound <= previous:
            raise ValueError("progressive band bounds must be strictly ascending")
        previous = band.upper_bound


def validate_withholding_bands(bands: Sequence[WithholdingBand]) -> None:
    """Require a non-empty ascending table whose only open band is last."""
    if not bands:
        raise ValueError("withholding table must have at least one band")
    previous: Decimal | None = None
    for index, band in enumerate(bands):
        if band.upper_bound is None:
            if index != len(bands) - 1:
                raise ValueError("only the last withholding band may be unbounded")
            continue
        if previous is not None and band.upper_bound <= previous:
            raise ValueError("withholding band bounds must be strictly ascending")
        previous = band.upper_bound


def cumulative_progressive(
    base: Decimal,
    bands: Sequence[ProgressiveBand],
) -> Decimal:
    """
    Sum of each band's rate applied to the slice of ``base`` inside it.

    ``rate_i * (min(base, upper_i) - min(base, lower_i))`` per band.  A base
    above the top bound contributes nothing further, so the result is
    capped at the value computed at the top boundary.

    Example (2024 contribution table):
        1412.00  -> 105.90
        2666.68  -> 105.90 + (2666.68 - 1412.00) * 0.09 = 218.8212
        10000.00 -> 908.8618 (ceiling reached at 7786.02)
    """
    validate_progressive_bands(bands)

    total = _ZERO
    lower = _ZERO
    for band in bands:
        total += band.rate * (min(base, band.upper_bound) - min(base, lower))
        lower = band.upper_bound

    logger.debug("cumulative_progressive_evaluated", extra={
        "base": str(base),
        "band_count": len(bands),
        "ceiling_reached": base > bands[-1].upper_bound,
        "result": str(total),
    })
    return total


def select_band(
    base: Decimal,
    bands: Sequence[WithholdingBand],
) -> WithholdingBand:
    """The first band whose upper bound covers ``base``."""
    for band in bands:
        if band.covers(base):
            return band
    # Fully bounded table and a base above the last bound: use the top band.
    return bands[-1]


def single_bracket(
    base: Decimal,
    bands: Sequence[WithholdingBand],
) -> Decimal:
    """
    ``base * rate - deduction`` for the band covering ``base``, clamped at 0.

    Example (withholding table):
        2259.20 -> 0 (exempt band, bound inclusive)
        3000.00 -> 3000.00 * 0.15 - 381.44 = 68.56
    """
    validate_withholding_bands(bands)

    band = select_band(base, bands)
    amount = base * band.rate - band.deduction
    result = amount if amount > _ZERO else _ZERO

    logger.debug("single_bracket_evaluated", extra={
        "base": str(base),
        "band_upper_bound": str(band.upper_bound) if band.upper_bound is not None else None,
        "rate": str(band.rate),
        "deduction": str(band.deduction),
        "result": str(result),
    })
    return result
