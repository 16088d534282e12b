"""
Config -> Engine Bridges.

Functions that convert ``ReferenceConfigurationSet`` artifacts into engine
inputs.  These live in juris_config (the producer) because the engines
must never import juris_config.

Usage:
    from juris_config import get_active_config
    from juris_config.bridges import build_payroll_tables, build_crime_catalog

    config = get_active_config()
    tables = build_payroll_tables(config)
    crimes = build_crime_catalog(config)
"""

from __future__ import annotations

from juris_config.schema import CrimeDef, ReferenceConfigurationSet
from juris_engines.brackets import ProgressiveBand, WithholdingBand, WithholdingTable
from juris_engines.dosimetry import CrimeRecord
from juris_engines.termination import PayrollTables


def build_payroll_tables(config: ReferenceConfigurationSet) -> PayrollTables:
    """Build the termination engine's tables from the payroll section."""
    payroll = config.payroll
    return PayrollTables(
        contribution_bands=tuple(
            ProgressiveBand(upper_bound=b.upper_bound, rate=b.rate)
            for b in payroll.contribution_bands
        ),
        withholding=WithholdingTable(
            bands=tuple(
                WithholdingBand(
                    upper_bound=b.upper_bound,
                    rate=b.rate,
                    deduction=b.deduction,
                )
                for b in payroll.withholding_bands
            ),
            dependent_deduction=payroll.dependent_deduction,
        ),
        fgts_deposit_rate=payroll.fgts_deposit_rate,
        fgts_penalty_rate=payroll.fgts_penalty_rate,
    )


def build_crime_record(crime: CrimeDef) -> CrimeRecord:
    return CrimeRecord(
        penalty_min=crime.penalty_min,
        penalty_max=crime.penalty_max,
        article=crime.article,
        name=crime.name,
        legislation=crime.legislation,
        crime_id=crime.crime_id,
    )


def build_crime_catalog(config: ReferenceConfigurationSet) -> tuple[CrimeRecord, ...]:
    """All catalogued crimes as engine records, in file order."""
    return tuple(build_crime_record(c) for c in config.crimes)
