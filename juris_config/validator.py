"""
Configuration Validator (``juris_config.validator``).

Responsibility
--------------
Checks a ``ReferenceConfigurationSet`` for structural integrity before it
is handed to the bridges: ordered bracket tables, rates within [0, 1],
well-formed crime ranges, unique ids, and civil terms drawn from the
engine's enumerated set.

Failure modes
-------------
* Validation errors  -> the set MUST NOT be used.
* Validation warnings  -> the set may be used but should be reviewed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from juris_config.schema import ReferenceConfigurationSet
from juris_engines.limitation import CIVIL_TERM_YEARS

_ZERO = Decimal("0")
_ONE = Decimal("1")


@dataclass
class ConfigValidationResult:
    """``is_valid`` returns ``True`` only when ``errors`` is empty."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def validate_configuration(config: ReferenceConfigurationSet) -> ConfigValidationResult:
    """Validate a configuration set; never raises."""
    result = ConfigValidationResult()
    _validate_payroll(config, result)
    _validate_crimes(config, result)
    _validate_civil_terms(config, result)
    return result


def _check_rate(name: str, rate: Decimal, result: ConfigValidationResult) -> None:
    if rate < _ZERO or rate > _ONE:
        result.add_error(f"{name} rate {rate} outside [0, 1]")


def _validate_payroll(config: ReferenceConfigurationSet, result: ConfigValidationResult) -> None:
    payroll = config.payroll

    if not payroll.contribution_bands:
        result.add_error("contribution table has no bands")
    previous = _ZERO
    for i, band in enumerate(payroll.contribution_bands):
        _check_rate(f"contribution band {i}", band.rate, result)
        if band.upper_bound <= previous:
            result.add_error(f"contribution band {i} upper bound {band.upper_bound} not ascending")
        previous = band.upper_bound

    bands = payroll.withholding_bands
    if not bands:
        result.add_error("withholding table has no bands")
    last_bound: Decimal | None = None
    for i, band in enumerate(bands):
        _check_rate(f"withholding band {i}", band.rate, result)
        if band.deduction < _ZERO:
            result.add_error(f"withholding band {i} has negative deduction")
        if band.upper_bound is None:
            if i != len(bands) - 1:
                result.add_error(f"withholding band {i} is unbounded but not last")
            continue
        if last_bound is not None and band.upper_bound <= last_bound:
            result.add_error(f"withholding band {i} upper bound {band.upper_bound} not ascending")
        last_bound = band.upper_bound
    if bands and bands[-1].upper_bound is not None:
        result.add_warning("withholding table has no open top band")

    if payroll.dependent_deduction < _ZERO:
        result.add_error("dependent deduction cannot be negative")
    _check_rate("fgts deposit", payroll.fgts_deposit_rate, result)
    _check_rate("fgts penalty", payroll.fgts_penalty_rate, result)


def _validate_crimes(config: ReferenceConfigurationSet, result: ConfigValidationResult) -> None:
    seen: set[str] = set()
    for crime in config.crimes:
        if crime.crime_id in seen:
            result.add_error(f"duplicate crime id {crime.crime_id!r}")
        seen.add(crime.crime_id)
        if crime.penalty_min < _ZERO or crime.penalty_min > crime.penalty_max:
            result.add_error(
                f"crime {crime.crime_id!r} has invalid range "
                f"[{crime.penalty_min}, {crime.penalty_max}]"
            )


def _validate_civil_terms(config: ReferenceConfigurationSet, result: ConfigValidationResult) -> None:
    seen: set[str] = set()
    for term in config.civil_terms:
        if term.code in seen:
            result.add_error(f"duplicate civil term code {term.code!r}")
        seen.add(term.code)
        if term.years not in CIVIL_TERM_YEARS:
            result.add_error(f"civil term {term.code!r} has unsupported years {term.years}")
