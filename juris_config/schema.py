"""
ReferenceConfigurationSet schema.

Defines the human-authored, reviewable reference data consumed by the
engines: yearly payroll tables, the crime catalog, and the civil
prescription term catalog.  YAML files are parsed into these types by the
loader, checked by the validator, and converted to engine types by the
bridges.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

# ---------------------------------------------------------------------------
# Scope
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConfigScope:
    """Scope of applicability for a configuration set."""

    jurisdiction: str
    currency: str
    effective_from: date
    effective_to: date | None = None

    def covers(self, as_of_date: date) -> bool:
        if as_of_date < self.effective_from:
            return False
        return self.effective_to is None or as_of_date <= self.effective_to


# ---------------------------------------------------------------------------
# Payroll tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContributionBandDef:
    """Cumulative band: marginal rate up to an upper bound."""

    upper_bound: Decimal
    rate: Decimal


@dataclass(frozen=True)
class WithholdingBandDef:
    """Single-bracket band; ``upper_bound`` None marks the open top band."""

    upper_bound: Decimal | None
    rate: Decimal
    deduction: Decimal


@dataclass(frozen=True)
class PayrollTablesDef:
    contribution_bands: tuple[ContributionBandDef, ...]
    withholding_bands: tuple[WithholdingBandDef, ...]
    dependent_deduction: Decimal
    fgts_deposit_rate: Decimal
    fgts_penalty_rate: Decimal


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CrimeDef:
    """One catalogued offence with its legal penalty range in years."""

    crime_id: str
    article: str
    name: str
    penalty_min: Decimal
    penalty_max: Decimal
    legislation: str


@dataclass(frozen=True)
class CivilTermDef:
    """A labelled civil prescription term and its legal basis."""

    code: str
    label: str
    years: int
    article: str


# ---------------------------------------------------------------------------
# Configuration set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReferenceConfigurationSet:
    """
    Complete reference data for one period of applicability.

    ``checksum`` is the SHA-256 of the canonical source document.
    """

    config_id: str
    version: int
    scope: ConfigScope
    payroll: PayrollTablesDef
    crimes: tuple[CrimeDef, ...]
    civil_terms: tuple[CivilTermDef, ...]
    checksum: str = ""
